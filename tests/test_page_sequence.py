import pytest

import poster_tiler.config
import poster_tiler.layout
import poster_tiler.pages


#============================================
def _build_pages(rows: int, cols: int) -> poster_tiler.pages.PageSequence:
	"""
	Build a page sequence for a 1200x900 image.

	Args:
		rows: Grid rows.
		cols: Grid columns.

	Returns:
		PageSequence.
	"""
	image = poster_tiler.config.SourceImage(pixel_width=1200, pixel_height=900)
	layout = poster_tiler.layout.compute_layout("a4", "portrait", rows, cols, image.aspect_ratio)
	return poster_tiler.pages.generate_pages(layout, image, rows, cols)


#============================================
def test_single_column_order() -> None:
	"""
	A 3x1 grid yields pages 1, 2, 3 down the column.
	"""
	pages = list(_build_pages(3, 1))
	assert [page.page_number for page in pages] == [1, 2, 3]
	assert [(page.row, page.col) for page in pages] == [(0, 0), (1, 0), (2, 0)]


#============================================
def test_row_major_numbering_is_bijective() -> None:
	"""
	Page numbers cover 1..rows*cols exactly, increasing in row-major order.
	"""
	for rows, cols in ((1, 1), (2, 3), (4, 2), (15, 15)):
		pages = _build_pages(rows, cols)
		assert len(pages) == rows * cols
		numbers = [page.page_number for page in pages]
		assert numbers == list(range(1, rows * cols + 1))
		cells = [(page.row, page.col) for page in pages]
		assert cells == list(poster_tiler.pages.page_order(rows, cols))
		assert len(set(cells)) == rows * cols
		for page in pages:
			assert page.page_number == page.row * cols + page.col + 1


#============================================
def test_captions() -> None:
	"""
	Captions carry the page number and 1-based row and column.
	"""
	pages = list(_build_pages(2, 3))
	assert pages[0].caption == "Page 1 | Row 1, Col 1"
	assert pages[5].caption == "Page 6 | Row 2, Col 3"
	assert poster_tiler.pages.format_caption(4, 1, 0) == "Page 4 | Row 2, Col 1"


#============================================
def test_sequence_is_restartable() -> None:
	"""
	Iterating twice gives the same pages; stopping early is allowed.
	"""
	pages = _build_pages(2, 2)
	iterator = iter(pages)
	first = next(iterator)
	assert first.page_number == 1
	assert list(pages) == list(pages)
	assert list(pages)[0] == first


#============================================
def test_descriptor_fields() -> None:
	"""
	Descriptors expose the sheet size and the tile rectangles.
	"""
	pages = _build_pages(2, 2)
	page = pages.page_at(1, 0)
	assert page.page_number == 3
	assert page.sheet_width_mm == 210.0
	assert page.sheet_height_mm == 297.0
	assert page.source_crop == page.tile.source_crop
	assert page.source_crop.x == 0.0
	assert page.source_crop.y == 450.0
	assert page.dest_draw.width == 210.0


#============================================
def test_page_at_out_of_range() -> None:
	"""
	Cells outside the grid are rejected.
	"""
	pages = _build_pages(2, 2)
	with pytest.raises(IndexError):
		pages.page_at(2, 0)
