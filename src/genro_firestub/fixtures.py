# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Seed data loaded by Database.initialize() when no seed is given."""

from __future__ import annotations

import copy
from typing import Any


class AuthConstants:
    anonymous_user1 = {
        'uid': 'anonym123',
        'isAnonymous': True,
        'displayName': 'Anonymous User 1',
    }
    anonymous_user2 = {
        'uid': 'anonym456',
        'isAnonymous': True,
        'displayName': 'Anonymous User 2',
    }


class DatabaseConstants:
    users_path = 'users'
    resumes_path = 'resumes'
    connected_path = '.info/connected'

    user1 = AuthConstants.anonymous_user1
    user2 = AuthConstants.anonymous_user2

    demo_state_resume1_id = 'demore1'
    demo_state_resume2_id = 'demore2'
    initial_state_resume_id = 'initre'


def _resume(resume_id: str, user: str, name: str) -> dict[str, Any]:
    return {
        'id': resume_id,
        'name': name,
        'user': user,
        'createdAt': 1600000000000,
        'updatedAt': 1600000000000,
        'preview': '',
        'metadata': {'template': 'onyx', 'language': 'en'},
    }


def default_seed() -> dict[str, Any]:
    """Return a fresh copy of the default seed tree.

    Two users, three resumes (two owned by user1) and the connection flag.
    """
    user1 = DatabaseConstants.user1['uid']
    user2 = DatabaseConstants.user2['uid']
    resumes = [
        _resume(DatabaseConstants.demo_state_resume1_id, user1, 'Demo Resume 1'),
        _resume(DatabaseConstants.demo_state_resume2_id, user2, 'Demo Resume 2'),
        _resume(DatabaseConstants.initial_state_resume_id, user1, 'Initial Resume'),
    ]
    return {
        DatabaseConstants.users_path: {
            user1: copy.deepcopy(DatabaseConstants.user1),
            user2: copy.deepcopy(DatabaseConstants.user2),
        },
        DatabaseConstants.resumes_path: {
            resume['id']: resume for resume in resumes
        },
        '.info': {'connected': True},
    }
