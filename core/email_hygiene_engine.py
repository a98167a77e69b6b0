# email_hygiene_engine.py
# ------------------------------------------------------------
# Ordered defect pipeline for one (name, email) pair.
# - No network calls; no deliverability claims.
# - First matching check wins; defects are never composed.
# - Mechanical single-step suggestions only (typos, formatting).
# - Never raises: every input lands in valid | fixable | invalid.
# ------------------------------------------------------------

import re
from typing import Optional

from utils.edit_distance import closest_match
from .models import (
    Classification, normalize_email,
    VALID, FIXABLE, INVALID,
    EMPTY, MISSING_AT, INVALID_FORMAT, CONTAINS_SPACES, MULTIPLE_AT,
    CONTAINS_WWW, DOMAIN_TYPO, INVALID_TLD, TLD_TYPO, DOMAIN_SIMILARITY,
)
from .typo_maps import TypoMaps, DEFAULT_TYPO_MAPS, KNOWN_PROVIDERS

DEFAULT_MAX_SIMILARITY_DISTANCE = 2

# non-empty local part, an "@", a domain with a "." in it
SHAPE_RE = re.compile(r"^[^@]+@.+\..+$", re.DOTALL)
# a "." followed by at least two characters
TLD_RE = re.compile(r"^.+\..{2,}$", re.DOTALL)
WHITESPACE_RE = re.compile(r"\s+")
WWW_RE = re.compile(r"www\.", re.IGNORECASE)


def _invalid(error_kind: str) -> Classification:
    return Classification(INVALID, error_kind, None)


def _fixable_or_invalid(error_kind: str, suggestion: Optional[str]) -> Classification:
    if suggestion:
        return Classification(FIXABLE, error_kind, suggestion)
    return Classification(INVALID, error_kind, None)


# ----------------------------
# Correction suggestions
# ----------------------------

def suggest_missing_at(email: str) -> Optional[str]:
    """
    Guess where the "@" went.
    Prefer splitting in front of a known provider name ("bob gmail.com" -> bob@gmail.com),
    otherwise treat the first dot-separated token as the username.
    A provider found only at the very start ("gmail.com") leaves no username: no suggestion.
    """
    provider_found = False
    for provider in KNOWN_PROVIDERS:
        idx = email.find(provider)
        if idx == -1:
            continue
        provider_found = True
        username = WHITESPACE_RE.sub("", email[:idx]).rstrip(".")
        domain = WHITESPACE_RE.sub("", email[idx:])
        if not username:
            continue
        if "." not in domain[len(provider):]:
            domain = f"{domain}.com"
        return f"{username}@{domain}"

    if provider_found:
        return None

    parts = email.split(".")
    if len(parts) < 2:
        return None
    username = WHITESPACE_RE.sub("", parts[0])
    domain = WHITESPACE_RE.sub("", ".".join(parts[1:]))
    if not username or not domain:
        return None
    return f"{username}@{domain}"


def suggest_without_whitespace(email: str) -> str:
    return WHITESPACE_RE.sub("", email)


def suggest_single_at(email: str) -> str:
    parts = email.split("@")
    return f"{parts[0]}@{''.join(parts[1:])}"


def suggest_without_www(email: str) -> str:
    return WWW_RE.sub("", email)


def suggest_tld_fix(domain: str, typo_maps: TypoMaps) -> Optional[str]:
    for bad, good in typo_maps.tld_typos.items():
        if domain.endswith(bad):
            return domain[:-len(bad)] + good
    return None


def suggest_similar_domain(domain: str, typo_maps: TypoMaps,
                           max_distance: int = DEFAULT_MAX_SIMILARITY_DISTANCE) -> Optional[str]:
    candidate, distance = closest_match(domain, typo_maps.popular_domains)
    if candidate is not None and 0 < distance <= max_distance:
        return candidate
    return None


# ----------------------------
# Main entrypoints
# ----------------------------

def classify_email(
    email: Optional[str],
    *,
    typo_maps: TypoMaps = DEFAULT_TYPO_MAPS,
    max_similarity_distance: int = DEFAULT_MAX_SIMILARITY_DISTANCE,
) -> Classification:
    """
    Run the full defect pipeline over one email.

    Order matters: empty, missing "@", bad shape, whitespace, multiple "@", "www.",
    exact domain typo, bad TLD, TLD typo, similarity to a popular domain.
    The first defect found is the one reported.
    """
    email = normalize_email(email)

    if not email:
        return _invalid(EMPTY)

    if "@" not in email:
        return _fixable_or_invalid(MISSING_AT, suggest_missing_at(email))

    if not SHAPE_RE.match(email):
        return _invalid(INVALID_FORMAT)

    if WHITESPACE_RE.search(email):
        return Classification(FIXABLE, CONTAINS_SPACES, suggest_without_whitespace(email))

    if email.count("@") > 1:
        return Classification(FIXABLE, MULTIPLE_AT, suggest_single_at(email))

    if WWW_RE.search(email):
        return Classification(FIXABLE, CONTAINS_WWW, suggest_without_www(email))

    local, domain = email.split("@", 1)

    canonical = typo_maps.canonical_domain(domain)
    if canonical is not None:
        if canonical == domain:
            # legitimate provider lookalike, leave it alone
            return Classification(VALID)
        return Classification(FIXABLE, DOMAIN_TYPO, f"{local}@{canonical}")

    if not TLD_RE.match(domain):
        suggestion = f"{local}@{domain}.com" if "." not in domain else None
        return _fixable_or_invalid(INVALID_TLD, suggestion)

    tld_fix = suggest_tld_fix(domain, typo_maps)
    if tld_fix:
        return Classification(FIXABLE, TLD_TYPO, f"{local}@{tld_fix}")

    similar = suggest_similar_domain(domain, typo_maps, max_similarity_distance)
    if similar:
        return Classification(FIXABLE, DOMAIN_SIMILARITY, f"{local}@{similar}")

    return Classification(VALID)


def classify_manual_edit(email: Optional[str]) -> Classification:
    """
    Re-check an operator-typed email with the short list of checks only
    (empty, missing "@", bad shape). No suggestions are produced.
    """
    email = normalize_email(email)

    if not email:
        return _invalid(EMPTY)
    if "@" not in email:
        return _invalid(MISSING_AT)
    if not SHAPE_RE.match(email):
        return _invalid(INVALID_FORMAT)
    return Classification(VALID)


def classify_row(name: str, email: Optional[str], **kwargs) -> Classification:
    """Row-level entrypoint; the name does not influence the outcome"""
    return classify_email(email, **kwargs)
