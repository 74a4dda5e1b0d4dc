# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
import sys

from .cli import main

sys.exit(main())
