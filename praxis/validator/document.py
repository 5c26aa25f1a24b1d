"""
Document Validator — One document against its directory README

The README beside a document is its specification. The pair is hashed;
on a cache hit the stored verdict is returned without calling the
classifier. On a miss the classifier's answer is parsed into a verdict:

    Yes   -> compliant
    Maybe -> not compliant, severity "warning"
    No    -> not compliant, severity "error"

Any other leading word is a VerdictParseError.
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from ..content.prompts import SYSTEM_PROMPT, build_user_prompt
from ..services.providers import LLMProvider
from .cache import CacheManager, CachedResult, content_hash


SPEC_FILENAME = "README.md"

# Leading markdown decoration the model sometimes adds despite instructions
_FIRST_WORD = re.compile(r"^[\s*_#>`~]*([A-Za-z]+)")
_BULLET = re.compile(r"^\s*[-*]\s+(.+?)\s*$")


class VerdictParseError(ValueError):
    """Raised when a classifier response does not open with Yes/Maybe/No."""


def parse_verdict(text: str) -> CachedResult:
    """Turn a classifier response into a verdict."""
    match = _FIRST_WORD.match(text or "")
    word = match.group(1).lower() if match else ""

    if word == "yes":
        compliant, severity = True, None
    elif word == "maybe":
        compliant, severity = False, "warning"
    elif word == "no":
        compliant, severity = False, "error"
    else:
        preview = (text or "").strip().splitlines()[0][:60] if (text or "").strip() else ""
        raise VerdictParseError(f"Unrecognised classifier verdict: {preview!r}")

    return CachedResult(
        compliant=compliant,
        issues=extract_issues(text),
        reason=text.strip(),
        severity=severity,
    )


def extract_issues(text: str) -> List[str]:
    """Bullet lines ('- ' or '* ') of a response."""
    issues = []
    for line in text.splitlines():
        match = _BULLET.match(line)
        if match:
            issues.append(match.group(1))
    return issues


def document_type_of(document_path: Union[str, Path]) -> str:
    """Document type is the name of the containing directory."""
    return Path(document_path).parent.name


class DocumentValidator:
    """Validates a single document, consulting the cache first."""

    def __init__(
        self,
        document_path: Union[str, Path],
        provider: LLMProvider,
        spec_path: Optional[Union[str, Path]] = None,
        cache: Optional[CacheManager] = None,
        use_cache: bool = True,
    ):
        self.document_path = Path(document_path)
        self.spec_path = Path(spec_path) if spec_path else self.document_path.parent / SPEC_FILENAME
        self.provider = provider
        self.cache = cache
        self.use_cache = use_cache and cache is not None
        self.cache_hit = False

    def validate(self) -> CachedResult:
        if not self.spec_path.exists():
            raise FileNotFoundError(f"Specification not found: {self.spec_path}")

        document_text = self.document_path.read_text(encoding="utf-8")
        spec_text = self.spec_path.read_text(encoding="utf-8")
        fingerprint = content_hash(document_text, spec_text)

        self.cache_hit = False
        if self.use_cache:
            cached = self.cache.read(self.document_path, fingerprint)
            if cached is not None:
                self.cache_hit = True
                return cached

        response = self.provider.complete(
            SYSTEM_PROMPT,
            build_user_prompt(document_text, spec_text, self.document_path.name),
        )
        result = parse_verdict(response.text)

        if self.use_cache:
            self.cache.write(
                self.document_path,
                fingerprint,
                result,
                document_type=document_type_of(self.document_path),
                spec_path=self.spec_path,
            )

        return result
