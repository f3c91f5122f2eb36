# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m ccru`` to run the CLI."""

from __future__ import annotations

from ccru.cli.app import main

if __name__ == "__main__":
    main()
