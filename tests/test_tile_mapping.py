import math

import poster_tiler.config
import poster_tiler.layout
import poster_tiler.tiles


TOLERANCE = 1e-9


#============================================
def _all_tiles(
	width: int,
	height: int,
	rows: int,
	cols: int,
	paper_size: str = "a4",
	orientation: str = "portrait",
) -> list[poster_tiler.config.TileMapping]:
	"""
	Map every cell of a grid for a synthetic image.

	Args:
		width: Image pixel width.
		height: Image pixel height.
		rows: Grid rows.
		cols: Grid columns.
		paper_size: Paper size key.
		orientation: Sheet orientation.

	Returns:
		List of TileMapping in row-major order.
	"""
	image = poster_tiler.config.SourceImage(pixel_width=width, pixel_height=height)
	layout = poster_tiler.layout.compute_layout(paper_size, orientation, rows, cols, image.aspect_ratio)
	return poster_tiler.tiles.compute_all_tiles(layout, image, rows, cols)


#============================================
def test_scenario_tile_geometry() -> None:
	"""
	Every tile of a 1600x1200 image on a 2x2 A4 grid.
	"""
	tiles = _all_tiles(1600, 1200, 2, 2)
	assert len(tiles) == 4
	for tile in tiles:
		assert tile.source_crop.width == 800.0
		assert tile.source_crop.height == 600.0
		assert tile.dest_draw.width == 210.0
		assert math.isclose(tile.dest_draw.height, 157.5, abs_tol=TOLERANCE)
		assert tile.dest_draw.x == 0.0
		assert math.isclose(tile.dest_draw.y, 69.75, abs_tol=TOLERANCE)
	last = tiles[-1]
	assert (last.row, last.col) == (1, 1)
	assert (last.source_crop.x, last.source_crop.y) == (800.0, 600.0)


#============================================
def test_crop_and_draw_share_aspect_ratio() -> None:
	"""
	No tile is distorted relative to its source crop.
	"""
	for width, height in ((1600, 1200), (1000, 3000), (777, 333), (5, 9)):
		for rows, cols in ((1, 1), (2, 3), (3, 2), (7, 4), (15, 15)):
			for orientation in poster_tiler.config.ORIENTATIONS:
				for tile in _all_tiles(width, height, rows, cols, "letter", orientation):
					assert math.isclose(
						tile.source_crop.aspect_ratio,
						tile.dest_draw.aspect_ratio,
						rel_tol=TOLERANCE,
					)


#============================================
def test_crops_partition_image() -> None:
	"""
	Crops cover the whole image with no gaps or overlaps.
	"""
	width, height, rows, cols = 1001, 757, 3, 4
	tiles = _all_tiles(width, height, rows, cols)
	total_area = sum(tile.source_crop.width * tile.source_crop.height for tile in tiles)
	assert math.isclose(total_area, width * height, rel_tol=TOLERANCE)

	by_cell = {(tile.row, tile.col): tile.source_crop for tile in tiles}
	for row in range(rows):
		assert by_cell[(row, 0)].x == 0.0
		assert math.isclose(by_cell[(row, cols - 1)].right, width, rel_tol=TOLERANCE)
		for col in range(1, cols):
			assert math.isclose(by_cell[(row, col - 1)].right, by_cell[(row, col)].x, rel_tol=TOLERANCE)
	for col in range(cols):
		assert by_cell[(0, col)].y == 0.0
		assert math.isclose(by_cell[(rows - 1, col)].bottom, height, rel_tol=TOLERANCE)
		for row in range(1, rows):
			assert math.isclose(by_cell[(row - 1, col)].bottom, by_cell[(row, col)].y, rel_tol=TOLERANCE)


#============================================
def test_fractional_crops_are_not_rounded() -> None:
	"""
	Pixel counts that do not divide evenly give fractional crops.
	"""
	tiles = _all_tiles(100, 100, 3, 3)
	crop = tiles[4].source_crop
	assert math.isclose(crop.width, 100 / 3)
	assert math.isclose(crop.x, 100 / 3)
	assert crop.width != int(crop.width)


#============================================
def test_every_tile_is_centered_on_its_sheet() -> None:
	"""
	Each sheet carries the same centered draw rectangle.
	"""
	image = poster_tiler.config.SourceImage(pixel_width=400, pixel_height=900)
	layout = poster_tiler.layout.compute_layout("a3", "landscape", 2, 3, image.aspect_ratio)
	tiles = poster_tiler.tiles.compute_all_tiles(layout, image, 2, 3)
	for tile in tiles:
		dest = tile.dest_draw
		assert math.isclose(dest.x * 2.0 + dest.width, layout.sheet_width, rel_tol=TOLERANCE)
		assert math.isclose(dest.y * 2.0 + dest.height, layout.sheet_height, rel_tol=TOLERANCE)
		assert dest == tiles[0].dest_draw
	assert math.isclose(tiles[0].dest_draw.width * 3, layout.draw_width, rel_tol=TOLERANCE)
