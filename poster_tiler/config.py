"""
Shared configuration, constants and data records.
"""

# Standard Library
import dataclasses
import math


PAPER_SIZES = {
	"a4": (210.0, 297.0),
	"a3": (297.0, 420.0),
	"letter": (215.9, 279.4),
}
ORIENTATIONS = ("portrait", "landscape")

DEFAULT_ROWS = 2
DEFAULT_COLS = 2
DEFAULT_OVERLAP_MM = 5.0
DEFAULT_PAPER_SIZE = "a4"
DEFAULT_ORIENTATION = "portrait"

MIN_GRID = 1
MAX_GRID = 15

DEFAULT_FONT_REGULAR = "Helvetica"
CAPTION_FONT_SIZE = 6.0
CAPTION_GRAY = 150 / 255.0
CAPTION_BOTTOM_MM = 5.0
BORDER_GRAY = 220 / 255.0
BORDER_WIDTH_MM = 0.1
CAPTION_TEMPLATE = "Page {page} | Row {row}, Col {col}"

DEFAULT_DPI = 150
PROGRESS_BAR_WIDTH = 20
OUTPUT_FORMATS = ("pdf", "png")


#============================================
class InvalidGridError(ValueError):
	"""
	Raised when a grid shape has fewer than one row or column.
	"""


#============================================
class InvalidImageError(ValueError):
	"""
	Raised when image dimensions cannot produce a finite aspect ratio.
	"""


@dataclasses.dataclass(frozen=True)
class SourceImage:
	pixel_width: int
	pixel_height: int
	source: object = None

	@property
	def aspect_ratio(self) -> float:
		return self.pixel_width / self.pixel_height


@dataclasses.dataclass(frozen=True)
class TileSettings:
	rows: int = DEFAULT_ROWS
	cols: int = DEFAULT_COLS
	overlap_mm: float = DEFAULT_OVERLAP_MM
	paper_size: str = DEFAULT_PAPER_SIZE
	orientation: str = DEFAULT_ORIENTATION


@dataclasses.dataclass(frozen=True)
class Rect:
	x: float
	y: float
	width: float
	height: float

	@property
	def aspect_ratio(self) -> float:
		return self.width / self.height

	@property
	def right(self) -> float:
		return self.x + self.width

	@property
	def bottom(self) -> float:
		return self.y + self.height


@dataclasses.dataclass(frozen=True)
class PosterLayout:
	sheet_width: float
	sheet_height: float
	total_width: float
	total_height: float
	draw_width: float
	draw_height: float
	fill_efficiency: float

	@property
	def poster_aspect(self) -> float:
		return self.total_width / self.total_height

	@property
	def offset_x(self) -> float:
		return (self.total_width - self.draw_width) / 2.0

	@property
	def offset_y(self) -> float:
		return (self.total_height - self.draw_height) / 2.0


@dataclasses.dataclass(frozen=True)
class TileMapping:
	row: int
	col: int
	source_crop: Rect
	dest_draw: Rect


@dataclasses.dataclass(frozen=True)
class PageDescriptor:
	page_number: int
	row: int
	col: int
	tile: TileMapping
	sheet_width_mm: float
	sheet_height_mm: float
	caption: str

	@property
	def source_crop(self) -> Rect:
		return self.tile.source_crop

	@property
	def dest_draw(self) -> Rect:
		return self.tile.dest_draw


@dataclasses.dataclass
class RenderConfig:
	output_format: str
	dpi: int
	draw_borders: bool
	draw_captions: bool
	max_pages: int | None


@dataclasses.dataclass
class RenderResult:
	total_pages: int
	rendered_pages: int
	output_paths: list[str]


#============================================
def validate_grid(rows: int, cols: int, bounded: bool = False) -> None:
	"""
	Reject grid shapes the layout engine must not be given.

	Args:
		rows: Number of sheet rows.
		cols: Number of sheet columns.
		bounded: Also enforce the settings range MIN_GRID..MAX_GRID.

	Raises:
		InvalidGridError: If the shape is not usable.
	"""
	for name, value in (("rows", rows), ("cols", cols)):
		if isinstance(value, bool) or not isinstance(value, int):
			raise InvalidGridError(f"{name} must be an integer, got {value!r}")
		if value < MIN_GRID:
			raise InvalidGridError(f"{name} must be >= {MIN_GRID}, got {value}")
		if bounded and value > MAX_GRID:
			raise InvalidGridError(f"{name} must be <= {MAX_GRID}, got {value}")


#============================================
def validate_image(image: SourceImage) -> None:
	"""
	Reject images whose dimensions cannot be laid out.

	Args:
		image: Loaded source image.

	Raises:
		InvalidImageError: If a dimension is not positive.
	"""
	if image.pixel_width <= 0 or image.pixel_height <= 0:
		raise InvalidImageError(
			f"image dimensions must be positive, got {image.pixel_width}x{image.pixel_height}"
		)
	if not math.isfinite(image.aspect_ratio):
		raise InvalidImageError(f"image aspect ratio is not finite: {image.aspect_ratio}")


#============================================
def normalize_name(value: str) -> str:
	"""
	Fold a paper size or orientation name to its catalog spelling.

	Args:
		value: Name as typed, e.g. "A4" or " Landscape".

	Returns:
		Lowercase name without surrounding whitespace.
	"""
	return value.strip().lower()


#============================================
def normalize_settings(settings: TileSettings) -> TileSettings:
	"""
	Apply normalize_name to the named fields of a settings record.

	Args:
		settings: Tile settings as entered.

	Returns:
		TileSettings with canonical paper size and orientation.
	"""
	return dataclasses.replace(
		settings,
		paper_size=normalize_name(settings.paper_size),
		orientation=normalize_name(settings.orientation),
	)


#============================================
def validate_settings(settings: TileSettings) -> None:
	"""
	Check every field a settings surface may change.

	Args:
		settings: Candidate tile settings.

	Raises:
		InvalidGridError: If rows or cols are out of range.
		ValueError: If paper size, orientation or overlap are invalid.
	"""
	validate_grid(settings.rows, settings.cols, bounded=True)
	if settings.paper_size not in PAPER_SIZES:
		raise ValueError(f"Unknown paper size: {settings.paper_size!r}")
	if settings.orientation not in ORIENTATIONS:
		raise ValueError(f"Unknown orientation: {settings.orientation!r}")
	if settings.overlap_mm < 0:
		raise ValueError(f"overlap_mm must be non-negative, got {settings.overlap_mm}")


#============================================
def mm_to_inches(value: float) -> float:
	"""
	Convert millimeters to inches.

	Args:
		value: Millimeters value.

	Returns:
		Inches value.
	"""
	return value / 25.4


#============================================
def mm_to_pixels(value: float, dpi: float) -> float:
	"""
	Convert millimeters to pixels at a given resolution.

	Args:
		value: Millimeters value.
		dpi: Dots per inch.

	Returns:
		Pixel length, unrounded.
	"""
	return mm_to_inches(value) * dpi
