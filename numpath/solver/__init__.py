# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from .verifier import (
    Solution,
    SolverResult,
    SolverStatus,
    Verifier,
    find_solution,
    has_solution,
)

__all__ = [
    "Verifier",
    "SolverStatus",
    "SolverResult",
    "Solution",
    "has_solution",
    "find_solution",
]
