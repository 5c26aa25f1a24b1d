"""
Praxis — Compile knowledge documents into agent profiles

Role documents declare, in a YAML manifest, which responsibilities,
constitution, context and reference documents they need. The compiler
inlines them into a single self-contained agent document. A validator
checks documents against their directory README through an LLM, with a
content-addressed cache in front so unchanged documents are not re-checked.
"""

__version__ = "0.1.0"
