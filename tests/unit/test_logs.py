"""Unit tests for logs.py"""

import logging

import pytest

from mdsite.logs import configure_logging


def test_configure_logging_sets_package_level():
    configure_logging("info")
    assert logging.getLogger("mdsite").level == logging.INFO
    assert logging.getLogger("mdsite.core.pipeline").getEffectiveLevel() == logging.INFO


def test_configure_logging_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("chatty")
