"""Placeholder substitution for prompt templates."""

from datetime import date
from typing import Dict, Mapping, Optional
import re

PLACEHOLDER_TOKENS = ("jobTitle", "jobDescription", "resumeText", "date")

# One alternation over every known token so a single scan handles them all;
# replacement text is never rescanned.
_TOKEN_PATTERN = re.compile(r"\{(" + "|".join(PLACEHOLDER_TOKENS) + r")\}")


def format_prompt_date(today: Optional[date] = None) -> str:
    """Return the date in MM/DD/YYYY form."""
    today = today or date.today()
    return today.strftime("%m/%d/%Y")


def build_prompt_values(job_title: str, job_description: str, resume_text: str, today: Optional[date] = None) -> Dict[str, str]:
    return {
        "jobTitle": job_title,
        "jobDescription": job_description,
        "resumeText": resume_text,
        "date": format_prompt_date(today),
    }


def substitute(body: str, values: Mapping[str, str]) -> str:
    """Replace every recognised {token} in body with its value.

    Unknown tokens, and known tokens with no value supplied, are left as they are.
    """
    def _replace(match: re.Match) -> str:
        value = values.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return _TOKEN_PATTERN.sub(_replace, body)
