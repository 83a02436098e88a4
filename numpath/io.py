from collections.abc import Sequence

from numpath.models import Coord, Puzzle


def read_puzzle(file_path: str) -> Puzzle:
    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()
    return Puzzle.from_string(content)


def write_puzzle(puzzle: Puzzle, file_path: str, path: Sequence[Coord] | None = None) -> None:
    if file_path.endswith(".svg"):
        write_puzzle_as_svg(puzzle, file_path, path=path)
    else:
        content = puzzle.to_string()
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)


def write_puzzle_as_svg(
    puzzle: Puzzle,
    file_path: str,
    cell_size: int = 80,
    path: Sequence[Coord] | None = None,
) -> None:
    size = puzzle.grid.size
    header_height = cell_size
    width = size * cell_size
    height = size * cell_size + header_height
    on_path = set(path or [])

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">',
        "<defs>",
        "  <style>",
        "    text { font-family: sans-serif; pointer-events: none; }",
        "    .number { font-size: 34px; font-weight: bold; fill: black; }",
        "    .target { font-size: 30px; font-weight: bold; fill: #4E5180; }",
        "  </style>",
        "</defs>",
        # Background
        f'<rect width="{width}" height="{height}" fill="white"/>',
        f'<text x="{width / 2}" y="{header_height / 2}" text-anchor="middle" dominant-baseline="central" '
        f'class="target">Target: {puzzle.target}</text>',
    ]

    for r, c in puzzle.grid.coords():
        x = c * cell_size
        y = r * cell_size + header_height

        if puzzle.grid.is_blocked((r, c)):
            fill = "#555555"
        elif (r, c) in on_path:
            fill = "#cde8cd"
        else:
            fill = "#f4f4f4"
        stroke_width = 4 if (r, c) == puzzle.start else 1

        lines.append(
            f'<rect x="{x}" y="{y}" width="{cell_size}" height="{cell_size}" '
            f'fill="{fill}" stroke="black" stroke-width="{stroke_width}"/>'
        )
        if not puzzle.grid.is_blocked((r, c)):
            lines.append(
                f'<text x="{x + cell_size / 2}" y="{y + cell_size / 2}" text-anchor="middle" '
                f'dominant-baseline="central" class="number">{puzzle.grid.value_at((r, c))}</text>'
            )

    # Path as a polyline through cell centres
    if path and len(path) > 1:
        points = " ".join(
            f"{c * cell_size + cell_size / 2},{r * cell_size + cell_size / 2 + header_height}" for r, c in path
        )
        lines.append(f'<polyline points="{points}" fill="none" stroke="#2e7d32" stroke-width="4" opacity="0.6"/>')

    lines.append("</svg>")

    with open(file_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
