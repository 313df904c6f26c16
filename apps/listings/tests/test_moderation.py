"""Tests for the listing moderation rules."""

from __future__ import annotations

from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from apps.listings.moderation import (
    ModerationConfig,
    ModerationEngine,
    Rule,
    get_moderation_engine,
)


class EvaluateTextTests(SimpleTestCase):
    def setUp(self) -> None:
        self.engine = ModerationEngine()

    def test_clean_text_passes(self) -> None:
        verdict = self.engine.evaluate_text("Bright two bedroom flat near Dhanmondi lake")
        self.assertTrue(verdict.clean)
        self.assertIsNone(verdict.reason)

    def test_empty_and_non_string_input_is_clean(self) -> None:
        for value in ("", None, 42, ["shit"]):
            self.assertTrue(self.engine.evaluate_text(value).clean, value)

    def test_profanity_is_rejected(self) -> None:
        verdict = self.engine.evaluate_text("This landlord is full of shit")
        self.assertFalse(verdict.clean)
        self.assertEqual(verdict.rule, Rule.PROFANITY)
        self.assertEqual(verdict.reason, "Contains inappropriate language or bad words")

    def test_profanity_matches_whole_words_only(self) -> None:
        self.assertTrue(self.engine.evaluate_text("Quiet flat near Scunthorpe road").clean)
        self.assertTrue(self.engine.evaluate_text("Fully cockroach free kitchen").clean)

    def test_wildcard_entry_matches_word_prefix(self) -> None:
        verdict = self.engine.evaluate_text("Fucking great view")
        self.assertEqual(verdict.rule, Rule.PROFANITY)

    def test_profanity_next_to_punctuation(self) -> None:
        self.assertEqual(self.engine.evaluate_text("Owner is a bastard!").rule, Rule.PROFANITY)

    def test_bangla_profanity_is_rejected(self) -> None:
        verdict = self.engine.evaluate_text("বাড়িওয়ালা একটা চোর।")
        self.assertEqual(verdict.rule, Rule.PROFANITY)

    def test_scam_keyword_names_the_keyword(self) -> None:
        verdict = self.engine.evaluate_text("Limited time offer for students")
        self.assertEqual(verdict.rule, Rule.SCAM_KEYWORD)
        self.assertEqual(verdict.reason, 'Contains suspicious scam keyword: "limited time"')

    def test_fake_listing_indicator(self) -> None:
        verdict = self.engine.evaluate_text("An amazing deal in Gulshan")
        self.assertEqual(verdict.rule, Rule.FAKE_LISTING)
        self.assertEqual(verdict.reason, 'Contains fake property indicator: "amazing deal"')

    def test_punctuation_spam(self) -> None:
        self.assertTrue(self.engine.evaluate_text("Great flat!!!!!").clean)
        verdict = self.engine.evaluate_text("Great flat!!!!!!")
        self.assertEqual(verdict.rule, Rule.PUNCTUATION_SPAM)
        self.assertEqual(verdict.reason, "Excessive punctuation detected (possible spam)")
        self.assertEqual(self.engine.evaluate_text("Really?????? Yes").rule, Rule.PUNCTUATION_SPAM)

    def test_caps_spam_counts_long_uppercase_words(self) -> None:
        self.assertTrue(self.engine.evaluate_text("BEST FLAT EVER in town").clean)
        self.assertTrue(self.engine.evaluate_text("AC TV WIFI GYM and lift").clean)
        verdict = self.engine.evaluate_text("BEST FLAT EVER HERE in town")
        self.assertEqual(verdict.rule, Rule.CAPS_SPAM)
        self.assertEqual(verdict.reason, "Excessive capital letters detected (possible spam)")

    def test_url_spam(self) -> None:
        self.assertTrue(self.engine.evaluate_text("See example.com or rentnest.xyz").clean)
        verdict = self.engine.evaluate_text("See a.com, b.org and www.c.net")
        self.assertEqual(verdict.rule, Rule.URL_SPAM)
        self.assertEqual(verdict.reason, "Contains too many URLs (possible spam)")

    def test_first_failing_rule_wins(self) -> None:
        verdict = self.engine.evaluate_text("Damn, limited time only!!!!!!")
        self.assertEqual(verdict.rule, Rule.PROFANITY)

    def test_evaluation_is_deterministic(self) -> None:
        text = "Urgent: cheap room"
        self.assertEqual(self.engine.evaluate_text(text), self.engine.evaluate_text(text))


class FieldCheckTests(SimpleTestCase):
    def setUp(self) -> None:
        self.engine = ModerationEngine()

    def test_valid_phone(self) -> None:
        self.assertTrue(self.engine.check_phone("01712345678").clean)
        self.assertTrue(self.engine.check_phone(" 01712345678 ").clean)

    def test_phone_format(self) -> None:
        for phone in ("1712345678", "0171234567", "017123456789", "+8801712345678", "", None):
            verdict = self.engine.check_phone(phone)
            self.assertEqual(verdict.rule, Rule.PHONE_FORMAT, phone)
            self.assertEqual(verdict.reason, "Invalid Bangladesh phone number format")

    def test_phone_with_repeated_digits(self) -> None:
        verdict = self.engine.check_phone("01111111111")
        self.assertEqual(verdict.rule, Rule.PHONE_REPEATED_DIGITS)
        self.assertEqual(verdict.reason, "Suspicious phone number pattern (too many repeated digits)")
        self.assertTrue(self.engine.check_phone("01711122233").clean)

    def test_price_floor_is_inclusive(self) -> None:
        self.assertTrue(self.engine.check_price(800).clean)
        self.assertTrue(self.engine.check_price(Decimal("800.00")).clean)
        verdict = self.engine.check_price(799)
        self.assertEqual(verdict.rule, Rule.PRICE_FLOOR)
        self.assertEqual(verdict.reason, "Rent must be at least 800 BDT")

    def test_non_numeric_price_is_rejected(self) -> None:
        self.assertEqual(self.engine.check_price("cheap").rule, Rule.PRICE_FLOOR)
        self.assertEqual(self.engine.check_price(None).rule, Rule.PRICE_FLOOR)


class ModerationConfigTests(SimpleTestCase):
    def test_extended_config_adds_terms(self) -> None:
        config = ModerationConfig().extended(profanity=["scumbag"], scam_keywords=["Bkash First"])
        engine = ModerationEngine(config)
        self.assertEqual(engine.evaluate_text("What a scumbag").rule, Rule.PROFANITY)
        self.assertEqual(engine.evaluate_text("Pay bkash first please").rule, Rule.SCAM_KEYWORD)
        # the default config is left untouched
        self.assertTrue(ModerationEngine().evaluate_text("What a scumbag").clean)

    def test_from_settings_options(self) -> None:
        config = ModerationConfig.from_settings(
            {"EXTRA_FAKE_LISTING_KEYWORDS": ["free electricity forever"], "MIN_RENT": "1000"}
        )
        self.assertIn("free electricity forever", config.fake_listing_keywords)
        self.assertEqual(config.min_rent, Decimal("1000"))
        self.assertEqual(ModerationEngine(config).check_price(900).reason, "Rent must be at least 1,000 BDT")

    def test_engine_follows_settings(self) -> None:
        with override_settings(LISTING_MODERATION={"EXTRA_SCAM_KEYWORDS": ["advance via bkash"]}):
            verdict = get_moderation_engine().evaluate_text("Send advance via bKash today")
            self.assertEqual(verdict.rule, Rule.SCAM_KEYWORD)
        self.assertTrue(get_moderation_engine().evaluate_text("Send advance via bKash today").clean)
