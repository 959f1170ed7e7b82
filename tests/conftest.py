"""
Pytest configuration and shared fixtures.

Provides:
- Repository root on sys.path so `spice2json` and `tests.factories` import
- AnyIO backend selection for `@pytest.mark.anyio` tests
- A small compiled schema covering relations, permissions and caveats
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Add the package root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Tests never read a developer's env file
os.environ.pop("ENV_FILE", None)
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402 (import after path setup)

from spice2json.domain.compiled import CompiledSchema  # noqa: E402
from tests.factories import (  # noqa: E402
    allowed,
    arrow,
    caveat,
    computed,
    definition,
    exclusion,
    nested,
    permission,
    relation,
    union,
    wildcard,
)


# Per AnyIO testing docs: https://anyio.readthedocs.io/en/stable/testing.html
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def document_schema() -> CompiledSchema:
    """
    Compiled form of:

        /** A user of the system */
        definition acme/user {}

        definition acme/folder {
            relation viewer: acme/user
        }

        /** A document */
        definition acme/document {
            relation parent: acme/folder
            // Who can read
            relation viewer: acme/user | acme/user:* with ip_allowed
            relation banned: acme/user
            permission view = (viewer + parent->viewer) - banned
        }

        caveat ip_allowed(ip ipaddress, limit int) { ... }
    """
    return CompiledSchema(
        object_definitions=(
            definition("acme/user", comment="/** A user of the system */"),
            definition("acme/folder", relation("viewer", allowed("acme/user"))),
            definition(
                "acme/document",
                relation("parent", allowed("acme/folder")),
                relation(
                    "viewer",
                    allowed("acme/user"),
                    wildcard("acme/user", caveat="ip_allowed"),
                    comment="// Who can read",
                ),
                relation("banned", allowed("acme/user")),
                permission(
                    "view",
                    exclusion(
                        nested(union(computed("viewer"), arrow("parent", "viewer"))),
                        computed("banned"),
                    ),
                ),
                comment="/** A document */",
            ),
        ),
        caveat_definitions=(caveat("ip_allowed", {"ip": "ipaddress", "limit": "int"}),),
    )
