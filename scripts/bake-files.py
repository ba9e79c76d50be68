#!/usr/bin/env python3

import os
import sys

SCRIPT_DIR = os.path.dirname(__file__)
SOURCE_ROOT = os.path.join(SCRIPT_DIR, '..')

sys.path.append(SOURCE_ROOT)
import bakr.cli

sys.exit(bakr.cli.main())
