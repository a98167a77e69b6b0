# typo_maps.py
# ------------------------------------------------------------
# Static reference data for the defect pipeline.
# - Exact full-domain typos for the major free-mail providers.
# - Provider lookalikes that are legitimate map to themselves and are never rewritten.
# - Trailing TLD typos; only obvious ones, not real country codes like .co or .om.
# - Popular domains backing the edit-distance fallback (order breaks ties).
# Loaded once; everything handed to the classifier is read-only.
# ------------------------------------------------------------

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN_TYPOS: Dict[str, str] = {
    # gmail
    "gmail.con": "gmail.com",
    "gmail.cm": "gmail.com",
    "gmail.co": "gmail.com",
    "gmail.om": "gmail.com",
    "gmail.comm": "gmail.com",
    "gmial.com": "gmail.com",
    "gamil.com": "gmail.com",
    "gmal.com": "gmail.com",
    "gmai.com": "gmail.com",
    "gnail.com": "gmail.com",
    "gmaill.com": "gmail.com",
    "gmali.com": "gmail.com",
    "googlemail.com": "googlemail.com",
    # yahoo
    "yahoo.con": "yahoo.com",
    "yahoo.cm": "yahoo.com",
    "yahoo.co": "yahoo.com",
    "yaho.com": "yahoo.com",
    "yahooo.com": "yahoo.com",
    "yahho.com": "yahoo.com",
    "yhoo.com": "yahoo.com",
    "yahoo.co.uk": "yahoo.co.uk",
    "yahoo.ca": "yahoo.ca",
    "yahoo.fr": "yahoo.fr",
    "yahoo.de": "yahoo.de",
    "yahoo.in": "yahoo.in",
    "ymail.com": "ymail.com",
    # hotmail
    "hotmail.con": "hotmail.com",
    "hotmail.cm": "hotmail.com",
    "hotmail.co": "hotmail.com",
    "hotmal.com": "hotmail.com",
    "hotmial.com": "hotmail.com",
    "hotmai.com": "hotmail.com",
    "hotnail.com": "hotmail.com",
    "hotmil.com": "hotmail.com",
    "hotmail.co.uk": "hotmail.co.uk",
    "hotmail.ca": "hotmail.ca",
    "hotmail.fr": "hotmail.fr",
    "hotmail.it": "hotmail.it",
    # outlook
    "outlook.con": "outlook.com",
    "outlook.co": "outlook.com",
    "outlok.com": "outlook.com",
    "outloo.com": "outlook.com",
    "outlokk.com": "outlook.com",
    "otlook.com": "outlook.com",
    "outlook.fr": "outlook.fr",
    # aol
    "aol.con": "aol.com",
    "aol.co": "aol.com",
    "aoll.com": "aol.com",
    "aim.com": "aim.com",
    # live / msn
    "live.con": "live.com",
    "live.co": "live.com",
    "live.co.uk": "live.co.uk",
    "live.ca": "live.ca",
    "msn.con": "msn.com",
    "msn.co": "msn.com",
    # icloud / me
    "icloud.con": "icloud.com",
    "icloud.co": "icloud.com",
    "iclod.com": "icloud.com",
    "icoud.com": "icloud.com",
    "icluod.com": "icloud.com",
    "me.con": "me.com",
    "mac.com": "mac.com",
    # generic provider that sits one edit away from gmail.com
    "mail.com": "mail.com",
}

DEFAULT_TLD_TYPOS: Dict[str, str] = {
    ".con": ".com",
    ".cmo": ".com",
    ".cim": ".com",
    ".c0m": ".com",
    ".comm": ".com",
    ".comn": ".com",
    ".vom": ".com",
    ".xom": ".com",
    ".ocm": ".com",
    ".cpm": ".com",
    ".nett": ".net",
    ".nte": ".net",
    ".ney": ".net",
    ".orgg": ".org",
    ".ogr": ".org",
    ".rog": ".org",
}

DEFAULT_POPULAR_DOMAINS: Tuple[str, ...] = (
    "gmail.com",
    "yahoo.com",
    "hotmail.com",
    "outlook.com",
    "aol.com",
    "icloud.com",
)

# Provider names searched for when an address has no "@"
KNOWN_PROVIDERS: Tuple[str, ...] = ("gmail", "yahoo", "hotmail", "outlook", "aol", "icloud")


@dataclass(frozen=True)
class TypoMaps:
    domain_typos: Mapping[str, str]
    tld_typos: Mapping[str, str]
    popular_domains: Tuple[str, ...]

    def canonical_domain(self, domain: str) -> Optional[str]:
        return self.domain_typos.get(domain)


def _lowered(mapping: Dict[str, str]) -> Dict[str, str]:
    return {str(k).strip().lower(): str(v).strip().lower() for k, v in mapping.items()}


def build_typo_maps(domain_typos: Optional[Dict[str, str]] = None,
                    tld_typos: Optional[Dict[str, str]] = None,
                    popular_domains: Optional[List[str]] = None) -> TypoMaps:
    """
    Overlay caller-supplied entries on the embedded defaults and freeze the result
    """
    domains = dict(DEFAULT_DOMAIN_TYPOS)
    domains.update(_lowered(domain_typos or {}))

    tlds = dict(DEFAULT_TLD_TYPOS)
    for bad, good in _lowered(tld_typos or {}).items():
        if not bad.startswith(".") or not good.startswith("."):
            logger.warning(f"Ignoring TLD typo entry {bad!r} -> {good!r}: suffixes must start with '.'")
            continue
        tlds[bad] = good

    popular = tuple(d.strip().lower() for d in popular_domains) if popular_domains else DEFAULT_POPULAR_DOMAINS

    return TypoMaps(
        domain_typos=MappingProxyType(domains),
        tld_typos=MappingProxyType(tlds),
        popular_domains=popular,
    )


def load_typo_maps(path: Optional[str] = None) -> TypoMaps:
    """
    Load typo maps from a JSON file if present; fall back to embedded defaults.
    Expected keys: domain_typos, tld_typos, popular_domains (all optional).
    """
    if not path:
        return DEFAULT_TYPO_MAPS

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info(f"Typo map file {path} not found, using embedded defaults")
        return DEFAULT_TYPO_MAPS
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read typo map file {path}: {str(e)}")
        return DEFAULT_TYPO_MAPS

    if not isinstance(data, dict):
        logger.warning(f"Typo map file {path} must contain a JSON object, using embedded defaults")
        return DEFAULT_TYPO_MAPS

    return build_typo_maps(
        domain_typos=data.get("domain_typos"),
        tld_typos=data.get("tld_typos"),
        popular_domains=data.get("popular_domains"),
    )


DEFAULT_TYPO_MAPS = build_typo_maps()
