"""
Language Governor - authorship phrasing rules for every text generator.

Captions, alt text, case studies, summaries: anything written about an
image is checked against the forbidden phrases of its AuthorshipStatus.
Violations fail the text. Nothing is rewritten silently.

The allowed phrases feed prompt construction only. They are advisory and
never a security boundary; validate() is the boundary.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Sequence

from authorship_governance.engines.authorship.metadata_rules import resolve_status
from authorship_governance.engines.authorship.reason_codes import ReasonCode
from authorship_governance.engines.authorship.types import AuthorshipStatus

# ── Allowed phrasing per status ─────────────────────────────────────────

ALLOWED_PHRASES: Dict[AuthorshipStatus, List[str]] = {
    AuthorshipStatus.VERIFIED_ORIGINAL: [
        "captured by",
        "photographed by",
        "shot by",
        "created by",
        "taken by",
        "photography by",
        "photo by",
        "image by",
    ],
    AuthorshipStatus.DECLARED_BY_USER: [
        "supplied by",
        "processed by",
        "provided by",
        "submitted by",
        "curated by",
    ],
    AuthorshipStatus.UNVERIFIED: [
        "image used",
        "example image",
        "image shown",
        "image provided",
        "image courtesy",
    ],
    AuthorshipStatus.SYNTHETIC_AI: [
        "ai-generated illustration",
        "ai-generated image",
        "ai-created illustration",
        "generated illustration",
        "synthetic illustration",
        "ai illustration",
    ],
}

# ── Forbidden patterns per status ───────────────────────────────────────

_CAPTURE_CLAIMS = [
    r"\b(?:captured|photographed|shot|taken)\s+by\b",
    r"\bphotography\s+by\b",
    r"\bphoto\s+by\b",
]
_ATTRIBUTION_CLAIMS = [
    r"\b(?:captured|photographed|shot|taken|created)\s+by\b",
    r"\bphotography\s+by\b",
    r"\bphoto\s+by\b",
    r"\b(?:supplied|processed|provided)\s+by\b",
]
_PHOTOGRAPHY_CLAIMS = [
    r"\bphotographer\b",
    r"\boriginal\s+(?:photo|image|photograph)\b",
]


def _compile(patterns: Sequence[str]) -> List[Pattern[str]]:
    return [re.compile(p, re.I) for p in patterns]


FORBIDDEN_PATTERNS: Dict[AuthorshipStatus, List[Pattern[str]]] = {
    AuthorshipStatus.VERIFIED_ORIGINAL: [],
    AuthorshipStatus.DECLARED_BY_USER: _compile(_CAPTURE_CLAIMS),
    AuthorshipStatus.UNVERIFIED: _compile(_ATTRIBUTION_CLAIMS),
    AuthorshipStatus.SYNTHETIC_AI: _compile(_ATTRIBUTION_CLAIMS + _PHOTOGRAPHY_CLAIMS),
}

# Unknown statuses get the strictest rules
_FALLBACK_FORBIDDEN = FORBIDDEN_PATTERNS[AuthorshipStatus.SYNTHETIC_AI]
_FALLBACK_ALLOWED = ALLOWED_PHRASES[AuthorshipStatus.UNVERIFIED]

for _table in (ALLOWED_PHRASES, FORBIDDEN_PATTERNS):
    if set(_table) != set(AuthorshipStatus):
        raise RuntimeError("Language tables must cover every AuthorshipStatus")


# ── Data models ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LanguageViolation:
    """One forbidden phrase found in one text item."""
    pattern: str
    matched_text: str
    position: int              # character offset in the text item
    message: str
    reason_code: ReasonCode = ReasonCode.LANGUAGE_VIOLATION
    item_index: int = 0        # which text item, for batch validation


@dataclass
class LanguageValidationResult:
    valid: bool
    violations: List[LanguageViolation] = field(default_factory=list)


# ── Matching ────────────────────────────────────────────────────────────

def _rules_for(resolved: Optional[AuthorshipStatus]):
    if resolved is None:
        return "UNKNOWN", _FALLBACK_FORBIDDEN, _FALLBACK_ALLOWED
    return resolved.value, FORBIDDEN_PATTERNS[resolved], ALLOWED_PHRASES[resolved]


def scan(
    text: str,
    resolved: Optional[AuthorshipStatus],
    item_index: int = 0,
) -> List[LanguageViolation]:
    """
    Violations in one text item for an already-resolved status.

    None means the status was not recognized and gets the strictest rules.
    """
    label, forbidden, allowed = _rules_for(resolved)
    violations: List[LanguageViolation] = []
    for pattern in forbidden:
        for match in pattern.finditer(text or ""):
            violations.append(LanguageViolation(
                pattern=pattern.pattern,
                matched_text=match.group(0),
                position=match.start(),
                item_index=item_index,
                message=(
                    f'Forbidden phrase "{match.group(0)}" found in text for '
                    f"{label} image. Allowed phrases: {', '.join(allowed)}"
                ),
            ))
    violations.sort(key=lambda v: v.position)
    return violations


def validate(text: str, status: Any) -> LanguageValidationResult:
    """
    Check one text item against the authorship rules for ``status``.

    Every occurrence of every forbidden pattern is reported with its offset.
    """
    violations = scan(text, resolve_status(status))
    return LanguageValidationResult(valid=not violations, violations=violations)


def validate_batch(texts: Sequence[str], status: Any) -> LanguageValidationResult:
    """Validate independent text items; one failing item fails the batch."""
    resolved = resolve_status(status)
    violations: List[LanguageViolation] = []
    for index, text in enumerate(texts):
        violations.extend(scan(text, resolved, index))
    return LanguageValidationResult(valid=not violations, violations=violations)


def allowed_phrases(status: Any) -> List[str]:
    """Phrases a generator may use to describe the image origin."""
    return list(_rules_for(resolve_status(status))[2])


def prompt_instruction(status: Any) -> str:
    """
    Constraint sentence to include in any text generator's system prompt.

    Deterministic for a given status.
    """
    resolved = resolve_status(status)
    if resolved is None:
        return "Use generic phrasing. Do not attribute authorship."

    allowed = ", ".join(ALLOWED_PHRASES[resolved])

    if resolved == AuthorshipStatus.VERIFIED_ORIGINAL:
        return f"This is a verified original photograph. You may use: {allowed}."

    if resolved == AuthorshipStatus.DECLARED_BY_USER:
        return (
            "This image was declared by the user as their own, but is not "
            f"machine-verified. Use ONLY: {allowed}. Do NOT use "
            '"photographed by", "captured by", "shot by", "taken by", '
            '"photography by" or "photo by".'
        )

    if resolved == AuthorshipStatus.UNVERIFIED:
        return (
            f"This image has unverified authorship. Use ONLY: {allowed}. "
            "Do NOT attribute it to any specific photographer or creator, and "
            'do NOT use "created by", "supplied by", "processed by" or '
            '"provided by".'
        )

    return (
        f"This is an AI-generated image. Refer to it ONLY as: {allowed}. "
        'Do NOT use "photographed by", "captured by", "photographer", '
        '"original photo" or any other real-world photography terms.'
    )


def get_violation_messages(result: LanguageValidationResult) -> List[str]:
    return [v.message for v in result.violations]
