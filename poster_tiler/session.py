"""
Host-side state: the loaded image, the mutable settings and the derived layout.
"""

# Standard Library
import dataclasses

# local repo modules
import poster_tiler as pt
import poster_tiler.config
import poster_tiler.layout
import poster_tiler.pages


SourceImage = pt.config.SourceImage
TileSettings = pt.config.TileSettings
PosterLayout = pt.config.PosterLayout


class PosterSession:
	"""
	Holds one image and its settings and recomputes the layout on change.

	The layout is never edited in place. Every call to load_image or update
	replaces it with a fresh PosterLayout.
	"""

	def __init__(self, settings: TileSettings | None = None):
		self.settings = pt.config.normalize_settings(settings or TileSettings())
		pt.config.validate_settings(self.settings)
		self.image: SourceImage | None = None
		self.layout: PosterLayout | None = None

	def load_image(self, image: SourceImage) -> PosterLayout:
		"""
		Take ownership of a new image and apply the initial grid guess once.

		Args:
			image: Loaded source image.

		Returns:
			The recomputed PosterLayout.
		"""
		pt.config.validate_image(image)
		rows, cols, orientation = pt.layout.suggest_initial_grid(image.aspect_ratio)
		self.image = image
		self.settings = dataclasses.replace(
			self.settings,
			rows=rows,
			cols=cols,
			orientation=orientation,
		)
		return self.recompute()

	def clear_image(self) -> None:
		"""
		Drop the loaded image and its layout, keeping the settings.
		"""
		self.image = None
		self.layout = None

	def update(self, **changes) -> PosterLayout | None:
		"""
		Change one or more settings and recompute.

		Args:
			**changes: TileSettings fields to replace.

		Returns:
			The recomputed PosterLayout, or None if no image is loaded.
		"""
		settings = pt.config.normalize_settings(dataclasses.replace(self.settings, **changes))
		pt.config.validate_settings(settings)
		self.settings = settings
		return self.recompute()

	def recompute(self) -> PosterLayout | None:
		if self.image is None:
			self.layout = None
			return None
		s = self.settings
		self.layout = pt.layout.compute_layout(
			s.paper_size,
			s.orientation,
			s.rows,
			s.cols,
			self.image.aspect_ratio,
		)
		return self.layout

	def pages(self) -> pt.pages.PageSequence:
		"""
		Get the page sequence for the current state.

		Returns:
			PageSequence.
		"""
		if self.image is None or self.layout is None:
			raise RuntimeError("No image loaded")
		return pt.pages.generate_pages(self.layout, self.image, self.settings.rows, self.settings.cols)

	@property
	def page_count(self) -> int:
		return self.settings.rows * self.settings.cols

	def poster_size_cm(self) -> tuple[float, float]:
		"""
		Get the assembled poster size in centimeters.

		Returns:
			Tuple of (width_cm, height_cm).
		"""
		if self.layout is None:
			raise RuntimeError("No image loaded")
		return (self.layout.total_width / 10.0, self.layout.total_height / 10.0)

	def fill_percent(self) -> float:
		if self.layout is None:
			raise RuntimeError("No image loaded")
		return self.layout.fill_efficiency * 100.0
