"""
Tests for suiwallet_core.mnemonic: BIP-39 seed derivation.

Covers:
  - Pinned seed for the test mnemonic
  - BIP-39 reference vector (TREZOR passphrase)
  - Agreement with hashlib.pbkdf2_hmac
  - NFKD normalization of mnemonic and passphrase
  - Passphrase and typo sensitivity
  - Argument validation
"""

import hashlib
import unittest

from suiwallet_core.errors import ArgumentError
from suiwallet_core.mnemonic import SEED_ITERATIONS, SEED_SIZE, mnemonic_to_seed

from conftest import TEST_MNEMONIC, TEST_SEED_HEX

ABANDON_ABOUT = "abandon " * 11 + "about"


class TestMnemonicToSeed(unittest.TestCase):

    def test_test_mnemonic_seed(self):
        self.assertEqual(mnemonic_to_seed(TEST_MNEMONIC, "").hex(), TEST_SEED_HEX)

    def test_default_passphrase_is_empty(self):
        self.assertEqual(mnemonic_to_seed(TEST_MNEMONIC), mnemonic_to_seed(TEST_MNEMONIC, ""))

    def test_bip39_trezor_vector(self):
        self.assertEqual(
            mnemonic_to_seed(ABANDON_ABOUT, "TREZOR").hex(),
            "c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e5349553"
            "1f09a6987599d18264c1e1c92f2cf141630c7a3c4ab7c81b2f001698e7463b04",
        )

    def test_matches_hashlib(self):
        expected = hashlib.pbkdf2_hmac(
            "sha512", ABANDON_ABOUT.encode(), b"mnemonicpw", 2048, dklen=64,
        )
        self.assertEqual(mnemonic_to_seed(ABANDON_ABOUT, "pw"), expected)

    def test_seed_length(self):
        self.assertEqual(SEED_SIZE, 64)
        self.assertEqual(SEED_ITERATIONS, 2048)
        self.assertEqual(len(mnemonic_to_seed("any words at all")), 64)

    def test_deterministic(self):
        self.assertEqual(
            mnemonic_to_seed(TEST_MNEMONIC, "p"),
            mnemonic_to_seed(TEST_MNEMONIC, "p"),
        )


class TestNormalization(unittest.TestCase):

    def test_composed_and_decomposed_passphrase_agree(self):
        composed = mnemonic_to_seed(TEST_MNEMONIC, "\u00e9")
        decomposed = mnemonic_to_seed(TEST_MNEMONIC, "e\u0301")
        self.assertEqual(composed, decomposed)
        self.assertEqual(
            composed.hex(),
            "66c77b15121628993d51a14cd7bb81a9ac3fe3eff88bd3c6f9a8918ed5920af4"
            "08225589f0ee83a8fbb96ee3e29500067398876332eed3d970595fcc1c1ddf94",
        )

    def test_compatibility_forms_fold(self):
        # Full-width letters decompose to ASCII under NFKD.
        full_width = TEST_MNEMONIC.replace("junk", "\uff4a\uff55\uff4e\uff4b")
        self.assertEqual(mnemonic_to_seed(full_width).hex(), TEST_SEED_HEX)

    def test_ligature_passphrase(self):
        self.assertEqual(
            mnemonic_to_seed(TEST_MNEMONIC, "\ufb01"),
            mnemonic_to_seed(TEST_MNEMONIC, "fi"),
        )


class TestSensitivity(unittest.TestCase):

    def test_passphrase_changes_seed(self):
        self.assertNotEqual(
            mnemonic_to_seed(TEST_MNEMONIC, ""),
            mnemonic_to_seed(TEST_MNEMONIC, "different"),
        )

    def test_typo_is_not_corrected(self):
        typo = TEST_MNEMONIC.replace("junk", "junc")
        seed = mnemonic_to_seed(typo)
        self.assertEqual(len(seed), 64)
        self.assertNotEqual(seed.hex(), TEST_SEED_HEX)

    def test_whitespace_is_significant(self):
        self.assertNotEqual(
            mnemonic_to_seed(TEST_MNEMONIC),
            mnemonic_to_seed(TEST_MNEMONIC + " "),
        )


class TestValidation(unittest.TestCase):

    def test_none_mnemonic(self):
        with self.assertRaises(ArgumentError):
            mnemonic_to_seed(None)

    def test_bytes_mnemonic(self):
        with self.assertRaises(ArgumentError):
            mnemonic_to_seed(TEST_MNEMONIC.encode())

    def test_none_passphrase(self):
        with self.assertRaises(ArgumentError):
            mnemonic_to_seed(TEST_MNEMONIC, None)

    def test_empty_mnemonic_is_allowed(self):
        self.assertEqual(len(mnemonic_to_seed("")), 64)
