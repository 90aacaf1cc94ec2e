"""Creates a SVG file showing a path with curves next to its adaptive linearization.
The original curves are drawn in light gray, the emitted line segments in red
and their end points as small dots.
"""

import svgwrite

from avlin.config import LinearizationOptions
from avlin.path_linearizer import AvPathLinearizer
from avlin.segment import SegmentCollector

OUTPUT_FILE = "data/output/example/svg/linearize_path.svg"

# Normalized path: absolute coordinates, commands M L H V Z Q C only
PATH_SEGMENTS = [
    ["M", 10, 110],
    ["C", 10, 10, 110, 10, 110, 110],
    ["Q", 160, 10, 210, 110],
    ["H", 230],
    ["V", 130],
    ["C", 330, 130, 10, 230, 250, 230],
    ["L", 10, 230],
    ["Z"],
]

CANVAS_WIDTH = 260
CANVAS_HEIGHT = 250
APPROXIMATION_SCALE = 0.25  # coarse on purpose to make the segments visible


def original_path_string() -> str:
    """Return the input path as SVG path string."""
    return " ".join(f"{segment[0]}{' '.join(f'{float(arg):g}' for arg in segment[1:])}" for segment in PATH_SEGMENTS)


def main(output_file: str = OUTPUT_FILE):
    """Linearizes PATH_SEGMENTS and saves the drawing to a SVG file."""
    collector = SegmentCollector()
    options = LinearizationOptions(approximation_scale=APPROXIMATION_SCALE)
    AvPathLinearizer(collector, options).linearize_path(PATH_SEGMENTS)
    print(f"{len(PATH_SEGMENTS)} path commands -> {len(collector.drawing_segments)} line segments")

    dwg = svgwrite.Drawing(output_file, size=(f"{CANVAS_WIDTH}px", f"{CANVAS_HEIGHT}px"))
    dwg.add(dwg.path(d=original_path_string(), stroke="lightgray", stroke_width=4, fill="none"))
    dwg.add(dwg.path(d=collector.to_path_string(), stroke="red", stroke_width=0.5, fill="none"))
    for segment in collector.drawing_segments:
        dwg.add(dwg.circle(center=segment.end, r=1.0, fill="blue"))

    print(f"save file {output_file} ...")
    dwg.saveas(output_file, pretty=True, indent=2)
    print("save done.")
    return collector


if __name__ == "__main__":
    main()
