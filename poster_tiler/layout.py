"""
Poster layout math: sheet grid size, contain-fit and the initial grid guess.

All lengths are millimeters. Nothing here validates its inputs; callers
check grids and images with the helpers in poster_tiler.config first.
"""

# local repo modules
import poster_tiler as pt
import poster_tiler.config
import poster_tiler.paper


PosterLayout = pt.config.PosterLayout


#============================================
def contain_fit(box_width: float, box_height: float, aspect_ratio: float) -> tuple[float, float]:
	"""
	Scale a rectangle of the given aspect ratio to fit inside a box.

	Args:
		box_width: Box width.
		box_height: Box height.
		aspect_ratio: Width over height of the rectangle to fit.

	Returns:
		Tuple of (width, height) touching the box on at least one axis.
	"""
	box_aspect = box_width / box_height
	if aspect_ratio > box_aspect:
		width = box_width
		height = width / aspect_ratio
	else:
		height = box_height
		width = height * aspect_ratio
	return (width, height)


#============================================
def compute_layout(
	paper_size: str,
	orientation: str,
	rows: int,
	cols: int,
	image_aspect_ratio: float,
) -> PosterLayout:
	"""
	Compute the assembled poster size and the fitted image footprint.

	Rows scale the poster height and cols scale its width.

	Args:
		paper_size: Catalog key.
		orientation: portrait or landscape.
		rows: Number of sheet rows.
		cols: Number of sheet columns.
		image_aspect_ratio: Source width over source height.

	Returns:
		PosterLayout.
	"""
	sheet_width, sheet_height = pt.paper.sheet_dimensions(paper_size, orientation)
	total_width = sheet_width * cols
	total_height = sheet_height * rows
	draw_width, draw_height = contain_fit(total_width, total_height, image_aspect_ratio)
	fill_efficiency = (draw_width * draw_height) / (total_width * total_height)
	return PosterLayout(
		sheet_width=sheet_width,
		sheet_height=sheet_height,
		total_width=total_width,
		total_height=total_height,
		draw_width=draw_width,
		draw_height=draw_height,
		fill_efficiency=fill_efficiency,
	)


#============================================
def suggest_initial_grid(image_aspect_ratio: float) -> tuple[int, int, str]:
	"""
	Guess a starting grid for a freshly loaded image.

	Args:
		image_aspect_ratio: Source width over source height.

	Returns:
		Tuple of (rows, cols, orientation).
	"""
	if image_aspect_ratio > 1.0:
		return (2, 3, "landscape")
	return (3, 2, "portrait")
