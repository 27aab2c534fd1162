"""
Image loading, page rendering and the run manifest.
"""

# Standard Library
import json
import pathlib

# PIP3 modules
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont
import PIL.ImageOps
import reportlab.lib.units
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import poster_tiler as pt
import poster_tiler.config
import poster_tiler.pages


SourceImage = pt.config.SourceImage
PageDescriptor = pt.config.PageDescriptor
PosterLayout = pt.config.PosterLayout
TileSettings = pt.config.TileSettings
RenderConfig = pt.config.RenderConfig
RenderResult = pt.config.RenderResult
Rect = pt.config.Rect

MM = reportlab.lib.units.mm
DEFAULT_FONT_REGULAR = pt.config.DEFAULT_FONT_REGULAR
CAPTION_FONT_SIZE = pt.config.CAPTION_FONT_SIZE
CAPTION_GRAY = pt.config.CAPTION_GRAY
CAPTION_BOTTOM_MM = pt.config.CAPTION_BOTTOM_MM
BORDER_GRAY = pt.config.BORDER_GRAY
BORDER_WIDTH_MM = pt.config.BORDER_WIDTH_MM
PROGRESS_BAR_WIDTH = pt.config.PROGRESS_BAR_WIDTH


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"\r{prefix} [{bar}] {current}/{total} ({percent}%)", end="", flush=True)


#============================================
def load_source_image(path: pathlib.Path) -> SourceImage:
	"""
	Decode an image file into a SourceImage.

	Transparent areas are flattened onto white and EXIF rotation is applied,
	so the reported size matches what gets printed.

	Args:
		path: Image file path.

	Returns:
		SourceImage holding the decoded RGB image as its source.
	"""
	with PIL.Image.open(path) as handle:
		image = PIL.ImageOps.exif_transpose(handle)
		image.load()
	if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
		rgba = image.convert("RGBA")
		flattened = PIL.Image.new("RGB", rgba.size, "white")
		flattened.paste(rgba, mask=rgba.getchannel("A"))
		image = flattened
	else:
		image = image.convert("RGB")
	source_image = SourceImage(pixel_width=image.width, pixel_height=image.height, source=image)
	pt.config.validate_image(source_image)
	return source_image


#============================================
def crop_box(rect: Rect, image_width: int, image_height: int) -> tuple[int, int, int, int]:
	"""
	Round a fractional crop rectangle to whole pixels.

	Neighbouring crops share their rounded edge, so the boxes still tile the
	image without gaps or overlaps.

	Args:
		rect: Crop rectangle in source pixels.
		image_width: Source width.
		image_height: Source height.

	Returns:
		Tuple of (left, upper, right, lower) for PIL.
	"""
	left = int(round(round(rect.x, 6)))
	upper = int(round(round(rect.y, 6)))
	right = int(round(round(rect.right, 6)))
	lower = int(round(round(rect.bottom, 6)))
	right = min(max(right, left + 1), image_width)
	lower = min(max(lower, upper + 1), image_height)
	left = min(left, right - 1)
	upper = min(upper, lower - 1)
	return (left, upper, right, lower)


#============================================
def crop_page_image(page: PageDescriptor, image: PIL.Image.Image) -> PIL.Image.Image:
	"""
	Cut the source region of one page out of the decoded image.

	Args:
		page: Page descriptor.
		image: Decoded source image.

	Returns:
		Cropped PIL image.
	"""
	box = crop_box(page.source_crop, image.width, image.height)
	return image.crop(box)


#============================================
def draw_page(
	pdf: reportlab.pdfgen.canvas.Canvas,
	page: PageDescriptor,
	image: PIL.Image.Image,
	config: RenderConfig,
) -> None:
	"""
	Draw one sheet onto the current canvas page.

	Args:
		pdf: ReportLab canvas sized to the sheet.
		page: Page descriptor.
		image: Decoded source image.
		config: Render configuration.
	"""
	sheet_width = page.sheet_width_mm * MM
	sheet_height = page.sheet_height_mm * MM
	pdf.setFillColorRGB(1.0, 1.0, 1.0)
	pdf.rect(0, 0, sheet_width, sheet_height, stroke=0, fill=1)

	dest = page.dest_draw
	# ReportLab measures y from the bottom edge
	draw_x = dest.x * MM
	draw_y = (page.sheet_height_mm - dest.bottom) * MM
	image_reader = reportlab.lib.utils.ImageReader(crop_page_image(page, image))
	pdf.drawImage(
		image_reader,
		draw_x,
		draw_y,
		width=dest.width * MM,
		height=dest.height * MM,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)

	if config.draw_borders:
		pdf.setStrokeColorRGB(BORDER_GRAY, BORDER_GRAY, BORDER_GRAY)
		pdf.setLineWidth(BORDER_WIDTH_MM * MM)
		pdf.rect(draw_x, draw_y, dest.width * MM, dest.height * MM, stroke=1, fill=0)

	if config.draw_captions:
		pdf.setFillColorRGB(CAPTION_GRAY, CAPTION_GRAY, CAPTION_GRAY)
		pdf.setFont(DEFAULT_FONT_REGULAR, CAPTION_FONT_SIZE)
		pdf.drawCentredString(sheet_width / 2.0, CAPTION_BOTTOM_MM * MM, page.caption)


#============================================
def pages_to_render(pages: pt.pages.PageSequence, config: RenderConfig) -> int:
	"""
	Count how many pages a render will emit.

	Args:
		pages: Page sequence.
		config: Render configuration.

	Returns:
		Page count after the max_pages limit.
	"""
	total = len(pages)
	if config.max_pages is not None:
		total = max(0, min(total, config.max_pages))
	return total


#============================================
def render_pdf(
	pages: pt.pages.PageSequence,
	source_image: SourceImage,
	output_path: pathlib.Path,
	config: RenderConfig,
	verbose: bool = True,
) -> RenderResult:
	"""
	Render the page sequence into a single PDF, one sheet per page.

	Args:
		pages: Page sequence.
		source_image: SourceImage whose source is a decoded PIL image.
		output_path: Output PDF path.
		config: Render configuration.
		verbose: Print a progress bar.

	Returns:
		RenderResult.
	"""
	image = source_image.source
	total = pages_to_render(pages, config)
	pdf = None
	rendered = 0
	for page in pages:
		if rendered >= total:
			break
		page_size = (page.sheet_width_mm * MM, page.sheet_height_mm * MM)
		if pdf is None:
			pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=page_size)
			pdf.setTitle(output_path.stem)
		else:
			pdf.setPageSize(page_size)
		draw_page(pdf, page, image, config)
		pdf.showPage()
		rendered += 1
		if verbose:
			print_progress("Pages", rendered, total)
	if verbose and rendered:
		print()
	if pdf is None:
		return RenderResult(
			total_pages=len(pages),
			rendered_pages=0,
			output_paths=[],
		)
	pdf.save()
	return RenderResult(
		total_pages=len(pages),
		rendered_pages=rendered,
		output_paths=[str(output_path)],
	)


#============================================
def render_sheet_image(
	page: PageDescriptor,
	image: PIL.Image.Image,
	dpi: int,
	config: RenderConfig,
) -> PIL.Image.Image:
	"""
	Rasterize one sheet at the given resolution.

	Args:
		page: Page descriptor.
		image: Decoded source image.
		dpi: Output resolution in dots per inch.
		config: Render configuration.

	Returns:
		RGB sheet image.
	"""
	scale = pt.config.mm_to_pixels(1.0, dpi)
	sheet_size = (
		int(round(page.sheet_width_mm * scale)),
		int(round(page.sheet_height_mm * scale)),
	)
	sheet = PIL.Image.new("RGB", sheet_size, "white")

	dest = page.dest_draw
	x0 = int(round(dest.x * scale))
	y0 = int(round(dest.y * scale))
	width = max(1, int(round(dest.width * scale)))
	height = max(1, int(round(dest.height * scale)))
	segment = crop_page_image(page, image).resize((width, height), PIL.Image.Resampling.LANCZOS)
	sheet.paste(segment, (x0, y0))

	draw = PIL.ImageDraw.Draw(sheet)
	if config.draw_borders:
		border = int(round(BORDER_GRAY * 255))
		line_width = max(1, int(round(BORDER_WIDTH_MM * scale)))
		draw.rectangle(
			(x0, y0, x0 + width - 1, y0 + height - 1),
			outline=(border, border, border),
			width=line_width,
		)
	if config.draw_captions:
		gray = int(round(CAPTION_GRAY * 255))
		font_px = max(1, int(round(CAPTION_FONT_SIZE / 72.0 * dpi)))
		font = PIL.ImageFont.load_default(size=font_px)
		draw.text(
			(sheet_size[0] / 2.0, sheet_size[1] - CAPTION_BOTTOM_MM * scale),
			page.caption,
			fill=(gray, gray, gray),
			font=font,
			anchor="ms",
		)
	return sheet


#============================================
def png_sheet_path(output_path: pathlib.Path, page_number: int) -> pathlib.Path:
	"""
	Name the PNG file of one sheet.

	Args:
		output_path: Base output path; its suffix is replaced.
		page_number: 1-based page number.

	Returns:
		Sheet file path.
	"""
	return output_path.with_name(f"{output_path.stem}_page_{page_number:03d}.png")


#============================================
def render_png_sheets(
	pages: pt.pages.PageSequence,
	source_image: SourceImage,
	output_path: pathlib.Path,
	config: RenderConfig,
	verbose: bool = True,
) -> RenderResult:
	"""
	Render every page as its own PNG sheet.

	Args:
		pages: Page sequence.
		source_image: SourceImage whose source is a decoded PIL image.
		output_path: Base output path.
		config: Render configuration.
		verbose: Print a progress bar.

	Returns:
		RenderResult.
	"""
	image = source_image.source
	total = pages_to_render(pages, config)
	output_paths = []
	for page in pages:
		if len(output_paths) >= total:
			break
		sheet = render_sheet_image(page, image, config.dpi, config)
		sheet_path = png_sheet_path(output_path, page.page_number)
		sheet.save(sheet_path, "PNG", dpi=(config.dpi, config.dpi))
		output_paths.append(str(sheet_path))
		if verbose:
			print_progress("Pages", len(output_paths), total)
	if verbose and output_paths:
		print()
	return RenderResult(
		total_pages=len(pages),
		rendered_pages=len(output_paths),
		output_paths=output_paths,
	)


#============================================
def render_pages(
	pages: pt.pages.PageSequence,
	source_image: SourceImage,
	output_path: pathlib.Path,
	config: RenderConfig,
	verbose: bool = True,
) -> RenderResult:
	"""
	Render pages in the configured output format.

	Args:
		pages: Page sequence.
		source_image: Loaded source image.
		output_path: Output path.
		config: Render configuration.
		verbose: Print a progress bar.

	Returns:
		RenderResult.
	"""
	if config.output_format == "pdf":
		return render_pdf(pages, source_image, output_path, config, verbose=verbose)
	if config.output_format == "png":
		return render_png_sheets(pages, source_image, output_path, config, verbose=verbose)
	raise ValueError(f"Unknown output format: {config.output_format!r}")


#============================================
def rect_to_dict(rect: Rect) -> dict:
	return {"x": rect.x, "y": rect.y, "w": rect.width, "h": rect.height}


#============================================
def page_to_dict(page: PageDescriptor) -> dict:
	"""
	Serialize a page descriptor for the manifest.

	Args:
		page: Page descriptor.

	Returns:
		JSON-ready dict.
	"""
	return {
		"pageNumber": page.page_number,
		"row": page.row,
		"col": page.col,
		"sourceCropRect": rect_to_dict(page.source_crop),
		"destDrawRect": rect_to_dict(page.dest_draw),
		"sheetWidthMm": page.sheet_width_mm,
		"sheetHeightMm": page.sheet_height_mm,
		"caption": page.caption,
	}


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: pathlib.Path,
	source_image: SourceImage,
	settings: TileSettings,
	layout: PosterLayout,
	pages: pt.pages.PageSequence,
	result: RenderResult,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		input_path: Source image path.
		source_image: Loaded source image.
		settings: Tile settings used.
		layout: Poster layout.
		pages: Page sequence.
		result: Render result.
	"""
	data = {
		"input": str(input_path),
		"image": {
			"pixel_width": source_image.pixel_width,
			"pixel_height": source_image.pixel_height,
			"aspect_ratio": source_image.aspect_ratio,
		},
		"settings": {
			"rows": settings.rows,
			"cols": settings.cols,
			"overlap_mm": settings.overlap_mm,
			"paper_size": settings.paper_size,
			"orientation": settings.orientation,
		},
		"layout": {
			"sheet_width": layout.sheet_width,
			"sheet_height": layout.sheet_height,
			"total_width": layout.total_width,
			"total_height": layout.total_height,
			"draw_width": layout.draw_width,
			"draw_height": layout.draw_height,
			"fill_efficiency": layout.fill_efficiency,
		},
		"total_pages": result.total_pages,
		"rendered_pages": result.rendered_pages,
		"outputs": result.output_paths,
		"pages": [page_to_dict(page) for page in pages],
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
