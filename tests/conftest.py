# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for FireStub tests."""

import pytest

from genro_firestub import Database, FireStub, context
from genro_firestub.fixtures import default_seed


@pytest.fixture
def db():
    """A database loaded with the default seed."""
    return Database(default_seed())


@pytest.fixture
def stub():
    """A fresh context with the default seed."""
    stub = FireStub(default_seed())
    yield stub
    stub.reset()


@pytest.fixture(autouse=True)
def _reset_default_context():
    yield
    context.reset()
