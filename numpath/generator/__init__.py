# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from .generator import START, GenerationStats, Generator, UngeneratablePuzzleError

__all__ = [
    "Generator",
    "GenerationStats",
    "UngeneratablePuzzleError",
    "START",
]
