# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""Web adapters for serving and checking AI Domain Data."""
