# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2026 Darkmine Pty Ltd

from pathlib import Path
import sys

import pytest


ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC_PATH = ROOT / "python" / "src"

if str(PYTHON_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC_PATH))


@pytest.fixture
def flat_trio():
    """Three surface points of a plane square to the core axis at depth ``z``."""
    def make(z):
        return [(3.0, 0.0, z), (-1.5, 2.6, z), (-1.5, -2.6, z)]
    return make
