"""Prompt construction for AI candidate review."""

from typing import Iterable, List, Optional

from candidate_review.services.materials import ApplicationMaterials

ROLE_FRAMING = "You are an assistant helping business recruiters evaluate candidates."
NO_DOCUMENT_TEXT = "Candidate Documents: No extracted resume text available."
OUTPUT_CONTRACT = (
    "Provide:\n"
    "- A star rating from 1-5 assessing suitability for the role.\n"
    "- A concise 2-3 sentence plain-text summary describing strengths and concerns.\n"
    "\n"
    'Respond strictly as a JSON object with exactly two keys: "rating" (integer 1-5) '
    'and "summary" (string). Do not include any other keys, markdown or commentary.'
)


def normalize_hints(hints: Optional[Iterable[str]]) -> List[str]:
    """Strip hints and drop blank ones."""
    if not hints:
        return []
    return [hint.strip() for hint in hints if isinstance(hint, str) and hint.strip()]


def build_review_prompt(materials: ApplicationMaterials, hints: Optional[Iterable[str]] = None) -> str:
    """
    Build the review prompt for one application.

    Deterministic: the same materials and hints always produce the same text.
    The cover letter section is omitted when absent; the documents section
    states explicitly when no extracted text exists.
    """
    sections = [
        ROLE_FRAMING,
        f"Job Title: {materials.job_title}",
        f"Job Description:\n{materials.job_description}",
    ]

    if materials.job_requirements:
        sections.append(f"Job Requirements:\n{materials.job_requirements}")

    if materials.cover_letter:
        sections.append(f"Cover Letter:\n{materials.cover_letter}")

    if materials.document_text:
        sections.append(f"Candidate Documents:\n{materials.document_text}")
    else:
        sections.append(NO_DOCUMENT_TEXT)

    sections.append(OUTPUT_CONTRACT)

    hint_lines = normalize_hints(hints)
    if hint_lines:
        sections.append("Additional guidance:\n" + "\n".join(f"- {line}" for line in hint_lines))

    return "\n\n".join(sections)
