# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Deterministic release and job archive builder."""

__version__ = "0.1.0"
