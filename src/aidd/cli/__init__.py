# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""AIDD command line interface."""
