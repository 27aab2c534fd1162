"""
Per-sheet mapping from source pixels to sheet millimeters.
"""

# local repo modules
import poster_tiler as pt
import poster_tiler.config


PosterLayout = pt.config.PosterLayout
SourceImage = pt.config.SourceImage
TileMapping = pt.config.TileMapping
Rect = pt.config.Rect


#============================================
def compute_tile(
	layout: PosterLayout,
	source_image: SourceImage,
	rows: int,
	cols: int,
	row: int,
	col: int,
) -> TileMapping:
	"""
	Map one grid cell to its source crop and its draw rectangle.

	The crop is a uniform split of the raw pixels and may be fractional.
	The draw rectangle is centered on its own sheet, so any margin left by
	the contain-fit is spread over every sheet.

	Args:
		layout: Poster layout for the current settings.
		source_image: Loaded source image.
		rows: Number of sheet rows.
		cols: Number of sheet columns.
		row: 0-based row of the cell.
		col: 0-based column of the cell.

	Returns:
		TileMapping.
	"""
	crop_width = source_image.pixel_width / cols
	crop_height = source_image.pixel_height / rows
	source_crop = Rect(
		x=col * crop_width,
		y=row * crop_height,
		width=crop_width,
		height=crop_height,
	)

	draw_width = layout.draw_width / cols
	draw_height = layout.draw_height / rows
	dest_draw = Rect(
		x=(layout.sheet_width - draw_width) / 2.0,
		y=(layout.sheet_height - draw_height) / 2.0,
		width=draw_width,
		height=draw_height,
	)
	return TileMapping(row=row, col=col, source_crop=source_crop, dest_draw=dest_draw)


#============================================
def compute_all_tiles(
	layout: PosterLayout,
	source_image: SourceImage,
	rows: int,
	cols: int,
) -> list[TileMapping]:
	"""
	Map every grid cell in row-major order.

	Args:
		layout: Poster layout.
		source_image: Loaded source image.
		rows: Number of sheet rows.
		cols: Number of sheet columns.

	Returns:
		List of TileMapping, index row * cols + col.
	"""
	return [
		compute_tile(layout, source_image, rows, cols, row, col)
		for row in range(rows)
		for col in range(cols)
	]
