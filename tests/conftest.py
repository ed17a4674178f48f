"""
Shared pytest fixtures and reference vectors for the suiwallet test suite.
"""

import logging

import pytest

from suiwallet_core.keypair import keypair_from_seed
from suiwallet_core.logging_config import LOGGER_NAME
from suiwallet_core.mnemonic import mnemonic_to_seed

TEST_MNEMONIC = "test test test test test test test test test test test junk"

# Reference values for TEST_MNEMONIC, passphrase "", account 0.
TEST_SEED_HEX = (
    "9dfc3c64c2f8bede1533b6a79f8570e5943e0b8fd1cf77107adf7b72cef42185"
    "d564a3aee24cab43f80e3c4538087d70fc824eabbad596a23c97b6ee8322ccc0"
)
TEST_MASTER_KEY_HEX = "479d8482f8f5390ee9a955e89de282b9d64e9f553ca486dc1a7f0e8a7a0a7039"
TEST_MASTER_CHAIN_HEX = "3bc0eb0ef0eef2e012b18036e654d6e1609b8b6778b682d9326c0d64aa170c7b"
TEST_ACCOUNT0_KEY_HEX = "e7df08d4e94c91bff2beb8ec2a737723c0eb97f9663512984f13720a5c00cfbb"
TEST_ACCOUNT0_CHAIN_HEX = "babfe1fc791a577241591a7d35d1f33f1af18310f1361b3425a32be8c229da03"
TEST_ACCOUNT0_PUBKEY_HEX = "1e6b2604ae257d45be4fb5bb3e9179936c6840552886895fe4434182228d610b"
TEST_ACCOUNT0_ADDRESS = "0xc88ef07b9b8b2fc3b7daad9478f4e1337f01792e2eab9c3794494e610636026e"
TEST_ACCOUNT1_KEY_HEX = "90467de7bdc407511cd2267f2e65c33d066330d2e3929df9e35848155c5ef0e1"
TEST_ACCOUNT1_PUBKEY_HEX = "1bf38f0b7fc49372e59816ddeb0703b489409b55fd17b448954d8ab81e629951"


@pytest.fixture(scope="session")
def test_seed():
    """64-byte BIP-39 seed of the test mnemonic."""
    return mnemonic_to_seed(TEST_MNEMONIC)


@pytest.fixture(scope="session")
def account0(test_seed):
    """Key pair for account 0 of the test mnemonic."""
    return keypair_from_seed(test_seed, 0)


@pytest.fixture(scope="session")
def account1(test_seed):
    """Key pair for account 1 of the test mnemonic."""
    return keypair_from_seed(test_seed, 1)


@pytest.fixture
def clean_logger():
    """The ``suiwallet`` logger, restored to its prior state afterwards."""
    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers, level, propagate = saved
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
