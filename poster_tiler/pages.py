"""
Row-major page sequencing.
"""

# Standard Library
import typing

# local repo modules
import poster_tiler as pt
import poster_tiler.config
import poster_tiler.tiles


PageDescriptor = pt.config.PageDescriptor
PosterLayout = pt.config.PosterLayout
SourceImage = pt.config.SourceImage
CAPTION_TEMPLATE = pt.config.CAPTION_TEMPLATE


#============================================
def format_caption(page_number: int, row: int, col: int) -> str:
	"""
	Build the caption printed at the foot of a sheet.

	Args:
		page_number: 1-based page number.
		row: 0-based row.
		col: 0-based column.

	Returns:
		Caption text with 1-based row and column labels.
	"""
	return CAPTION_TEMPLATE.format(page=page_number, row=row + 1, col=col + 1)


#============================================
def page_order(rows: int, cols: int) -> typing.Iterator[tuple[int, int]]:
	"""
	Yield grid cells in row-major order.

	Args:
		rows: Number of sheet rows.
		cols: Number of sheet columns.

	Yields:
		Tuple of (row, col).
	"""
	for row in range(rows):
		for col in range(cols):
			yield (row, col)


class PageSequence:
	"""
	Lazy, re-iterable sequence of page descriptors.

	Each iteration starts again at page 1. Pages are built on demand, so a
	consumer may stop at any point without further work being done.
	"""

	def __init__(self, layout: PosterLayout, source_image: SourceImage, rows: int, cols: int):
		self.layout = layout
		self.source_image = source_image
		self.rows = rows
		self.cols = cols

	def __len__(self) -> int:
		return self.rows * self.cols

	def __iter__(self) -> typing.Iterator[PageDescriptor]:
		for row, col in page_order(self.rows, self.cols):
			yield self.page_at(row, col)

	def page_at(self, row: int, col: int) -> PageDescriptor:
		"""
		Build the descriptor of a single cell.

		Args:
			row: 0-based row.
			col: 0-based column.

		Returns:
			PageDescriptor.
		"""
		if not (0 <= row < self.rows and 0 <= col < self.cols):
			raise IndexError(f"cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
		tile = pt.tiles.compute_tile(self.layout, self.source_image, self.rows, self.cols, row, col)
		page_number = row * self.cols + col + 1
		return PageDescriptor(
			page_number=page_number,
			row=row,
			col=col,
			tile=tile,
			sheet_width_mm=self.layout.sheet_width,
			sheet_height_mm=self.layout.sheet_height,
			caption=format_caption(page_number, row, col),
		)


#============================================
def generate_pages(
	layout: PosterLayout,
	source_image: SourceImage,
	rows: int,
	cols: int,
) -> PageSequence:
	"""
	Build the page sequence for a poster.

	Args:
		layout: Poster layout.
		source_image: Loaded source image.
		rows: Number of sheet rows.
		cols: Number of sheet columns.

	Returns:
		PageSequence yielding rows * cols descriptors.
	"""
	return PageSequence(layout, source_image, rows, cols)
