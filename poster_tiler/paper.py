"""
Physical sheet dimensions by paper size.
"""

# local repo modules
import poster_tiler as pt
import poster_tiler.config


PAPER_SIZES = pt.config.PAPER_SIZES
ORIENTATIONS = pt.config.ORIENTATIONS


#============================================
def dimensions_of(paper_size: str) -> tuple[float, float]:
	"""
	Look up the portrait dimensions of a paper size.

	Args:
		paper_size: Catalog key, one of a4, a3 or letter.

	Returns:
		Tuple of (width_mm, height_mm) with width <= height.
	"""
	key = pt.config.normalize_name(paper_size)
	if key not in PAPER_SIZES:
		raise ValueError(f"Unknown paper size: {paper_size!r}")
	return PAPER_SIZES[key]


#============================================
def sheet_dimensions(paper_size: str, orientation: str) -> tuple[float, float]:
	"""
	Get the effective sheet size once orientation is applied.

	Args:
		paper_size: Catalog key.
		orientation: portrait or landscape.

	Returns:
		Tuple of (width_mm, height_mm) as the sheet is printed.
	"""
	width, height = dimensions_of(paper_size)
	key = pt.config.normalize_name(orientation)
	if key not in ORIENTATIONS:
		raise ValueError(f"Unknown orientation: {orientation!r}")
	if key == "landscape":
		return (height, width)
	return (width, height)
