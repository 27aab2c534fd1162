"""
CLI entry points for image to poster conversion.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import poster_tiler as pt
import poster_tiler.config
import poster_tiler.render
import poster_tiler.session


TileSettings = pt.config.TileSettings
RenderConfig = pt.config.RenderConfig

PAPER_SIZES = pt.config.PAPER_SIZES
ORIENTATIONS = pt.config.ORIENTATIONS
OUTPUT_FORMATS = pt.config.OUTPUT_FORMATS
DEFAULT_DPI = pt.config.DEFAULT_DPI
DEFAULT_OVERLAP_MM = pt.config.DEFAULT_OVERLAP_MM
DEFAULT_PAPER_SIZE = pt.config.DEFAULT_PAPER_SIZE


#============================================
def build_render_config(args: argparse.Namespace) -> RenderConfig:
	"""
	Build render config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderConfig.
	"""
	return RenderConfig(
		output_format=args.output_format,
		dpi=args.dpi,
		draw_borders=args.draw_borders,
		draw_captions=args.draw_captions,
		max_pages=args.max_pages,
	)


#============================================
def apply_overrides(session: pt.session.PosterSession, args: argparse.Namespace) -> None:
	"""
	Apply explicit grid and orientation options on top of the initial guess.

	Args:
		session: Session with an image loaded.
		args: Parsed argparse namespace.
	"""
	changes = {}
	if args.rows is not None:
		changes["rows"] = args.rows
	if args.cols is not None:
		changes["cols"] = args.cols
	if args.orientation is not None:
		changes["orientation"] = args.orientation
	if changes:
		session.update(**changes)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Split an image into printable poster sheets.")
	parser.add_argument("input_path", help="Source image file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path (or PNG base name).")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-f", "--format", dest="output_format", choices=OUTPUT_FORMATS, help="Output format.")
	output_group.add_argument("--dpi", dest="dpi", type=int, default=DEFAULT_DPI, help="Resolution for PNG sheets.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-p", "--paper", dest="paper_size", choices=sorted(PAPER_SIZES), help="Paper size.")
	layout_group.add_argument("-r", "--rows", dest="rows", type=int, default=None, help="Sheet rows (default: guessed from the image).")
	layout_group.add_argument("-c", "--cols", dest="cols", type=int, default=None, help="Sheet columns (default: guessed from the image).")
	layout_group.add_argument("-O", "--orientation", dest="orientation", choices=ORIENTATIONS, default=None, help="Sheet orientation (default: guessed from the image).")
	layout_group.add_argument("--overlap", dest="overlap_mm", type=float, help="Overlap in mm (recorded only, not applied).")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-b", "--borders", dest="draw_borders", action="store_true", help="Draw a thin border around each tile.")
	behavior_group.add_argument("-B", "--no-borders", dest="draw_borders", action="store_false", help="Disable tile borders.")
	behavior_group.add_argument("-t", "--captions", dest="draw_captions", action="store_true", help="Print page captions.")
	behavior_group.add_argument("-T", "--no-captions", dest="draw_captions", action="store_false", help="Disable page captions.")

	limit_group = parser.add_argument_group("Limits")
	limit_group.add_argument("-g", "--max-pages", dest="max_pages", type=int, default=None, help="Limit number of pages rendered.")

	parser.set_defaults(
		output_format="pdf",
		paper_size=DEFAULT_PAPER_SIZE,
		overlap_mm=DEFAULT_OVERLAP_MM,
		draw_borders=True,
		draw_captions=True,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> pt.config.RenderResult:
	"""
	Run the full pipeline from image input to printable sheets.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderResult.
	"""
	print("Image to poster pipeline")
	print(f"Input image: {args.input_path}")
	print(f"Output: {args.output_path} ({args.output_format})")
	if args.max_pages is not None:
		print(f"Max pages: {args.max_pages}")

	start_time = time.perf_counter()
	input_path = pathlib.Path(args.input_path)
	source_image = pt.render.load_source_image(input_path)
	print(f"Image size: {source_image.pixel_width}x{source_image.pixel_height} px")

	settings = TileSettings(paper_size=args.paper_size, overlap_mm=args.overlap_mm)
	session = pt.session.PosterSession(settings)
	session.load_image(source_image)
	apply_overrides(session, args)
	load_end = time.perf_counter()

	s = session.settings
	layout = session.layout
	width_cm, height_cm = session.poster_size_cm()
	print(f"Paper: {s.paper_size} {s.orientation}")
	print(f"Grid: {s.rows} rows x {s.cols} cols ({session.page_count} pages)")
	print(f"Poster size: {width_cm:.1f} x {height_cm:.1f} cm")
	print(f"Image area: {layout.draw_width:.1f} x {layout.draw_height:.1f} mm")
	print(f"Fill efficiency: {session.fill_percent():.1f}%")

	output_path = pathlib.Path(args.output_path)
	config = build_render_config(args)
	pages = session.pages()
	print("Rendering pages")
	render_start = time.perf_counter()
	result = pt.render.render_pages(pages, source_image, output_path, config)
	render_end = time.perf_counter()
	print(f"Pages written: {result.rendered_pages} of {result.total_pages}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	pt.render.write_manifest(
		pathlib.Path(manifest_path),
		input_path,
		source_image,
		s,
		layout,
		pages,
		result,
	)

	total_time = time.perf_counter() - start_time
	print(
		"Timing: load={:.2f}s render={:.2f}s total={:.2f}s".format(
			load_end - start_time,
			render_end - render_start,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")
	return result


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
