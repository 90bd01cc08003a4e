"""
Pytest configuration and shared fixtures.
"""

import logging
import tempfile
from pathlib import Path

import pytest

from tern2dts.config import GeneratorConfig


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging setup so caplog sees tern2dts records in every test."""
    yield
    logger = logging.getLogger("tern2dts")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    """Default generator configuration without extra globals."""
    return GeneratorConfig(globals={})


@pytest.fixture
def sample_document():
    """Small Tern document covering classes, vars, functions and overlays."""
    return {
        "!name": "scriptable",
        "!define": {
            "Alert": {
                "addCancelAction": {
                    "!type": "fn(title: string)",
                    "!doc": "Adds a cancel action to the alert.",
                },
            },
            "Missing": {
                "thing": {"!type": "number"},
            },
        },
        "Alert": {
            "!type": "fn() -> +Alert",
            "!doc": "Presents an alert.",
            "!url": "scriptable://docs?bridgeName=Alert",
            "title": {
                "!type": "string",
                "!doc": "Title displayed in the alert.",
            },
            "addAction": {
                "!type": "fn(title: string)",
                "!doc": "Adds an action to the alert.",
                "!url": "scriptable://docs?bridgeName=Alert&methodName=addAction",
                "!scriptable.parameters": [
                    {"name": "title", "doc": "Title of the action."},
                ],
            },
            "presentAlert": {
                "!type": "fn() -> Promise[:t=number]",
                "!doc": "Presents the alert modally.",
                "!scriptable.returns": "Promise carrying the selected action index.",
            },
        },
        "Calendar": {
            "!doc": "Holds reminders and events.",
            "supportsAvailability": {
                "!type": "fn(availability: string) -> bool",
                "!doc": "Checks if the calendar supports availability.",
                "!scriptable.description": (
                    "<p>The following values are supported:</p>"
                    "<ul><li>busy</li><li>free</li><li>tentative</li><li>unavailable</li></ul>"
                ),
                "!scriptable.parameters": [
                    {"name": "availability", "doc": "Availability to check against."},
                ],
            },
        },
        "Size": {
            "!doc": "Structure representing a size.",
            "static zero": {
                "!type": "+Size",
                "!doc": "A size with zero width and height.",
            },
            "static make": {
                "!type": "fn(width: number, height: number) -> +Size",
                "!doc": "Creates a size.",
            },
        },
        "console": {
            "!doc": "Adds messages to the log.",
            "log": {
                "!type": "fn(message: ?)",
                "!doc": "Logs a message to the console.",
                "!scriptable.parameters": [
                    {"name": "message", "doc": "Message to log to the console."},
                ],
            },
            "warn": {
                "!type": "fn(message: ?)",
                "!doc": "Logs a warning message to the console.",
            },
            "error": {
                "!type": "fn(message: ?)",
                "!doc": "Logs an error message to the console.",
            },
        },
        "importModule": {
            "!type": "fn(name: string)",
            "!doc": "Imports a module.",
            "!scriptable.parameters": [
                {"name": "name", "doc": "Name of the module to import."},
            ],
        },
        "define": {"ignored": True},
        "details": [],
    }
