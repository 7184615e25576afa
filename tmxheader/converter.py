"""
Main converter - turns Tiled map files into C headers.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .constants import DEFAULT_PREVIEW_SCALE, DEFAULT_TEMPLATE, PREVIEW_SUFFIX
from .errors import ConversionError
from .header_renderer import HeaderRenderer
from .logging_config import get_logger
from .map_model import MapModel
from .map_reader import get_reader
from .preview import render_preview, write_preview
from .utils import file_base_name, format_date, load_text, output_path_for, save_text

logger = get_logger('converter')

PathLike = Union[str, Path]


@dataclass
class ConversionResult:
    """Outcome of converting one map file."""
    input_path: Path
    output_path: Optional[Path] = None
    preview_path: Optional[Path] = None
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MapConverter:
    """Converts Tiled maps to header files using one template."""

    def __init__(
        self,
        output_dir: PathLike,
        template_path: Optional[PathLike] = None,
        date: Optional[str] = None,
        preview: bool = False,
        preview_scale: int = DEFAULT_PREVIEW_SCALE
    ):
        """
        Initialize MapConverter.

        Args:
            output_dir: Directory receiving <baseName>Map.h files
            template_path: Header template (defaults to the bundled one)
            date: Preformatted date for {{date}} (defaults to today)
            preview: Also write a <baseName>Map.png layer preview
            preview_scale: Pixels per tile in the preview

        Raises:
            InputReadError: If the template cannot be read
            ValueError: If preview_scale is below 1
        """
        if preview_scale < 1:
            raise ValueError(f"preview_scale must be at least 1, got {preview_scale}")
        self.output_dir = Path(output_dir)
        self.template_path = Path(template_path) if template_path else DEFAULT_TEMPLATE
        self.template_text = load_text(self.template_path)
        self.date = date if date is not None else format_date()
        self.preview = preview
        self.preview_scale = preview_scale
        self.renderer = HeaderRenderer()

    def parse_map(self, input_path: PathLike) -> MapModel:
        """Read and parse a map file with the reader matching its extension."""
        reader = get_reader(input_path)
        text = load_text(input_path)
        return reader.parse(text, file_base_name(input_path))

    def convert_file(self, input_path: PathLike) -> Path:
        """
        Convert one map file and write its header.

        Returns:
            Path of the written header

        Raises:
            ConversionError: Any read, parse, decode or write failure. Nothing
                is written when parsing or rendering fails.
        """
        input_path = Path(input_path)
        try:
            model = self.parse_map(input_path)
            base_name = file_base_name(input_path)
            header = self.renderer.render(self.template_text, model, base_name, self.date)
            preview_image = render_preview(model, self.preview_scale) if self.preview else None

            output_path = output_path_for(input_path, self.output_dir)
            save_text(header, output_path)
            logger.info(f"Wrote {output_path} ({model.num_layers} layers, "
                        f"{model.num_object_groups} object groups)")

            if preview_image is not None:
                write_preview(preview_image, output_path_for(input_path, self.output_dir, PREVIEW_SUFFIX))
        except ConversionError as e:
            if e.path is None:
                e.path = str(input_path)
            raise

        return output_path

    def _convert_one(self, input_path: Path) -> ConversionResult:
        result = ConversionResult(input_path=input_path)
        try:
            result.output_path = self.convert_file(input_path)
            if self.preview:
                result.preview_path = output_path_for(input_path, self.output_dir, PREVIEW_SUFFIX)
        except ConversionError as e:
            logger.error(f"Failed to convert {e}")
            result.error = e
        return result

    def convert_files(self, input_paths: Iterable[PathLike], max_workers: int = 1) -> List[ConversionResult]:
        """
        Convert several maps; each conversion is independent.

        Returns:
            One ConversionResult per input, in input order
        """
        paths = [Path(p) for p in input_paths]
        if max_workers <= 1 or len(paths) <= 1:
            results = [self._convert_one(path) for path in paths]
        else:
            results_by_path = {}
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                future_to_index = {
                    executor.submit(self._convert_one, path): index
                    for index, path in enumerate(paths)
                }
                for future in as_completed(future_to_index):
                    results_by_path[future_to_index[future]] = future.result()
            results = [results_by_path[index] for index in range(len(paths))]

        converted = sum(1 for r in results if r.ok)
        logger.info(f"Converted {converted} of {len(results)} maps")
        return results
