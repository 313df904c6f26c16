"""Content moderation for listing submissions.

The engine screens free text (titles, descriptions) and two structured
fields (contact phone, rent amount) with fixed heuristic rules. Rules run
in a fixed order and the first failing rule decides the verdict, so every
rejection carries exactly one reason.

The deny-lists live in an immutable ``ModerationConfig`` that is handed
to the engine; a deployment adds its own terms through the
``LISTING_MODERATION`` setting instead of editing module state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Optional

from django.conf import settings  # type: ignore

from shared.domain.base import ValueObject
from shared.domain.value_objects import Money

# Entries ending in "*" match any word that starts with the stem.
DEFAULT_PROFANITY = (
    # English
    "arse",
    "arsehole",
    "asshole*",
    "bastard*",
    "bitch*",
    "bollocks",
    "bullshit*",
    "cock",
    "cocksucker*",
    "crap",
    "cunt*",
    "damn",
    "dick",
    "dickhead*",
    "douche*",
    "fag",
    "faggot*",
    "fuck*",
    "motherfuck*",
    "nigger*",
    "piss",
    "pissed",
    "prick",
    "pussy",
    "shit*",
    "slut*",
    "twat*",
    "wanker*",
    "whore*",
    # Bangla
    "মূর্খ",
    "বোকা",
    "চোর",
    "ভন্ড",
)

DEFAULT_SCAM_KEYWORDS = (
    "guaranteed",
    "risk free",
    "100% profit",
    "get rich quick",
    "limited time",
    "act now",
    "click here",
    "make money fast",
    "no questions asked",
    "cash only",
    "wire transfer only",
    "western union",
    "moneygram",
    "bitcoin only",
    "urgent",
    "emergency sale",
    "must sell today",
    "free money",
    "free cash",
    "lottery",
    "prize",
    "congratulations you won",
    "claim your prize",
)

DEFAULT_FAKE_LISTING_KEYWORDS = (
    "too good to be true",
    "unbelievable price",
    "amazing deal",
    "once in a lifetime",
    "below market value",
    "heavily discounted",
    "sacrifice sale",
    "distress sale",
    "foreclosure",
)

# Characters that separate words for the profanity rule.
_WORD_BREAK = r"\s!-/:-@\[-`{-~।॥‘-‟"

CAPS_WORD_RE = re.compile(r"\b[A-Z]{4,}\b")
URL_RE = re.compile(r"(?:https?://)?(?:www\.)?[a-zA-Z0-9-]+\.[a-zA-Z]{2,}")
BD_MOBILE_RE = re.compile(r"^01[0-9]{9}$")


class Rule:
    PROFANITY = "profanity"
    SCAM_KEYWORD = "scam_keyword"
    FAKE_LISTING = "fake_listing"
    PUNCTUATION_SPAM = "punctuation_spam"
    CAPS_SPAM = "caps_spam"
    URL_SPAM = "url_spam"
    PHONE_FORMAT = "phone_format"
    PHONE_REPEATED_DIGITS = "phone_repeated_digits"
    PRICE_FLOOR = "price_floor"


@dataclass(frozen=True)
class Verdict(ValueObject):
    clean: bool
    reason: Optional[str] = None
    rule: Optional[str] = None

    @classmethod
    def passed(cls) -> "Verdict":
        return cls(clean=True)

    @classmethod
    def rejected(cls, rule: str, reason: str) -> "Verdict":
        return cls(clean=False, reason=reason, rule=rule)

    def __bool__(self) -> bool:
        return self.clean


@dataclass(frozen=True)
class ModerationConfig(ValueObject):
    """Deny-lists and thresholds used by the moderation engine."""

    profanity: tuple[str, ...] = DEFAULT_PROFANITY
    scam_keywords: tuple[str, ...] = DEFAULT_SCAM_KEYWORDS
    fake_listing_keywords: tuple[str, ...] = DEFAULT_FAKE_LISTING_KEYWORDS
    max_exclamations: int = 5
    max_questions: int = 5
    max_caps_words: int = 3
    max_urls: int = 2
    min_distinct_phone_digits: int = 4
    min_rent: Decimal = Decimal("800")

    def extended(
        self,
        profanity: Iterable[str] = (),
        scam_keywords: Iterable[str] = (),
        fake_listing_keywords: Iterable[str] = (),
    ) -> "ModerationConfig":
        """Return a copy with extra deny-list entries appended."""
        return self.evolve(
            profanity=_merge(self.profanity, profanity),
            scam_keywords=_merge(self.scam_keywords, scam_keywords),
            fake_listing_keywords=_merge(self.fake_listing_keywords, fake_listing_keywords),
        )

    @classmethod
    def from_settings(cls, options: Optional[dict[str, Any]] = None) -> "ModerationConfig":
        if options is None:
            options = getattr(settings, "LISTING_MODERATION", {}) or {}
        config = cls()
        if "MIN_RENT" in options:
            config = config.evolve(min_rent=Decimal(str(options["MIN_RENT"])))
        return config.extended(
            profanity=options.get("EXTRA_PROFANITY", ()),
            scam_keywords=options.get("EXTRA_SCAM_KEYWORDS", ()),
            fake_listing_keywords=options.get("EXTRA_FAKE_LISTING_KEYWORDS", ()),
        )


def _merge(current: tuple[str, ...], extra: Iterable[str]) -> tuple[str, ...]:
    merged = list(current)
    for term in extra:
        term = term.strip().lower()
        if term and term not in merged:
            merged.append(term)
    return tuple(merged)


def _compile_profanity(terms: Iterable[str]) -> Optional[re.Pattern[str]]:
    alternatives = []
    for term in terms:
        term = term.strip().lower()
        if not term:
            continue
        if term.endswith("*"):
            stem = re.escape(term.rstrip("*"))
            alternatives.append(f"{stem}[^{_WORD_BREAK}]*")
        else:
            alternatives.append(re.escape(term))
    if not alternatives:
        return None
    # Longest first so that "motherfuck*" wins over "fuck*" in the match text.
    alternatives.sort(key=len, reverse=True)
    body = "|".join(alternatives)
    return re.compile(f"(?<![^{_WORD_BREAK}])(?:{body})(?![^{_WORD_BREAK}])", re.IGNORECASE)


@dataclass(frozen=True)
class ModerationEngine:
    """Applies the moderation rules of a ``ModerationConfig``."""

    config: ModerationConfig = field(default_factory=ModerationConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_profanity_re", _compile_profanity(self.config.profanity))

    def evaluate_text(self, text: Any) -> Verdict:
        if not text or not isinstance(text, str):
            return Verdict.passed()

        lowered = text.lower()

        if self._profanity_re is not None and self._profanity_re.search(text):
            return Verdict.rejected(Rule.PROFANITY, "Contains inappropriate language or bad words")

        for keyword in self.config.scam_keywords:
            if keyword.lower() in lowered:
                return Verdict.rejected(
                    Rule.SCAM_KEYWORD, f'Contains suspicious scam keyword: "{keyword}"'
                )

        for keyword in self.config.fake_listing_keywords:
            if keyword.lower() in lowered:
                return Verdict.rejected(
                    Rule.FAKE_LISTING, f'Contains fake property indicator: "{keyword}"'
                )

        if (
            text.count("!") > self.config.max_exclamations
            or text.count("?") > self.config.max_questions
        ):
            return Verdict.rejected(
                Rule.PUNCTUATION_SPAM, "Excessive punctuation detected (possible spam)"
            )

        if len(CAPS_WORD_RE.findall(text)) > self.config.max_caps_words:
            return Verdict.rejected(
                Rule.CAPS_SPAM, "Excessive capital letters detected (possible spam)"
            )

        if len(URL_RE.findall(text)) > self.config.max_urls:
            return Verdict.rejected(Rule.URL_SPAM, "Contains too many URLs (possible spam)")

        return Verdict.passed()

    def check_phone(self, phone: Any) -> Verdict:
        phone = phone.strip() if isinstance(phone, str) else ""
        if not BD_MOBILE_RE.match(phone):
            return Verdict.rejected(Rule.PHONE_FORMAT, "Invalid Bangladesh phone number format")
        if len(set(phone)) < self.config.min_distinct_phone_digits:
            return Verdict.rejected(
                Rule.PHONE_REPEATED_DIGITS,
                "Suspicious phone number pattern (too many repeated digits)",
            )
        return Verdict.passed()

    def check_price(self, amount: Any) -> Verdict:
        floor = Money(self.config.min_rent)
        try:
            rent = Money.of(amount)
        except ValueError:
            return Verdict.rejected(Rule.PRICE_FLOOR, f"Rent must be at least {floor}")
        if rent < floor:
            return Verdict.rejected(Rule.PRICE_FLOOR, f"Rent must be at least {floor}")
        return Verdict.passed()


_default_engine: Optional[ModerationEngine] = None


def get_moderation_engine() -> ModerationEngine:
    """Engine configured from ``settings.LISTING_MODERATION``."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ModerationEngine(ModerationConfig.from_settings())
    return _default_engine


def reset_moderation_engine(**kwargs: Any) -> None:
    """Drop the cached engine (connected to ``setting_changed``)."""
    global _default_engine
    setting = kwargs.get("setting")
    if setting is None or setting == "LISTING_MODERATION":
        _default_engine = None
