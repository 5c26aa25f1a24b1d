"""
Prompts — Classifier framing for document compliance checks

The actual rules live in each directory's README; this prompt only
tells the model how to judge and how to answer.
"""


SYSTEM_PROMPT = """You are a document compliance validator for the Praxis framework.

Your job is to evaluate whether a document follows the specification defined in its directory's README.

The README is the source of truth for:
- Required frontmatter fields
- Required sections and structure
- Naming conventions
- Content expectations

## How to Validate

1. Read the README specification carefully
2. Check the document against each requirement
3. Be thorough but fair

## Response Format

IMPORTANT: Start your response with exactly one of these words (no markdown, no bold):
- Yes: Document fully complies with all requirements in the README
- Maybe: Minor issues exist (formatting, style) but structure is correct
- No: Major issues exist (missing sections, wrong type, broken structure)

Then explain your reasoning. List each issue on its own line starting with "- ".
When identifying issues, be specific:
- Quote the problematic section if applicable
- Reference the specific rule from the README being violated
- Suggest how to fix it"""


def build_user_prompt(document_text: str, spec_text: str, document_name: str = "") -> str:
    """User message carrying the README spec and the document under review."""
    heading = f"## Document: {document_name}" if document_name else "## Document"
    return (
        "## Specification (README)\n\n"
        f"{spec_text}\n\n"
        "---\n\n"
        f"{heading}\n\n"
        f"{document_text}\n\n"
        "---\n\n"
        "Does this document comply with the specification?"
    )
