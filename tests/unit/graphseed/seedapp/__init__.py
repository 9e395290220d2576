# -*- coding: utf-8 -*-
"""Location: ./tests/unit/graphseed/seedapp/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Sample application whose classes seed documents in the tests construct.
"""
