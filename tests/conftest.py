"""Pytest fixtures for spec-delta tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.workspace import Workspace

AUTH_SPEC = """# user-auth Specification

## Purpose
Authenticate users of the web application and manage their sessions securely.

## Requirements
### Requirement: Login
The system SHALL authenticate users with an email and password.

#### Scenario: Valid credentials
- **GIVEN** a registered user
- **WHEN** they submit valid credentials
- **THEN** a session is created

### Requirement: Password Reset
The system MUST allow users to reset a forgotten password.

#### Scenario: Reset link
- **WHEN** a user requests a reset
- **THEN** a reset link is emailed

### Requirement: Lockout
The system SHALL lock an account after five failed attempts.

#### Scenario: Too many failures
- **GIVEN** four failed attempts
- **WHEN** a fifth attempt fails
- **THEN** the account is locked
"""

ADD_LOGOUT_DELTA = """## ADDED Requirements
### Requirement: Logout
The system SHALL end the session when the user logs out.

#### Scenario: Explicit logout
- **WHEN** the user clicks logout
- **THEN** the session is destroyed
"""

LEGACY_CHANGE = """# Change: Add logout

## Why
Users currently have no way to end a session, which is a problem on shared machines.

## What Changes
- **user-auth:** Add a logout requirement to end sessions
- **billing:** Remove the legacy invoice export
- **profile:** Update avatar size limits
"""

TASKS = """## 1. Implementation
- [x] 1.1 Add logout endpoint
- [ ] 1.2 Add logout button
- [ ] 1.3 Update docs
"""


def write_file(path: Path, content: str) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def auth_spec() -> str:
    """A valid capability spec with three requirements."""
    return AUTH_SPEC


@pytest.fixture
def add_logout_delta() -> str:
    """A delta file adding one requirement."""
    return ADD_LOGOUT_DELTA


@pytest.fixture
def legacy_change() -> str:
    """A whole-document change proposal."""
    return LEGACY_CHANGE


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create an openspec project with one spec and one active change."""
    openspec = temp_dir / "openspec"
    write_file(openspec / "specs" / "user-auth" / "spec.md", AUTH_SPEC)

    change = openspec / "changes" / "add-logout"
    write_file(change / "proposal.md", LEGACY_CHANGE)
    write_file(change / "tasks.md", TASKS)
    write_file(change / "specs" / "user-auth" / "spec.md", ADD_LOGOUT_DELTA)

    (openspec / "changes" / "archive").mkdir(parents=True)
    return temp_dir


@pytest.fixture
def workspace(project_dir: Path) -> Workspace:
    """Workspace rooted at the sample project."""
    return Workspace(project_dir)
