import argparse
import logging
import sys
from typing import Optional, Union

from psd_layers import DecodedImage
from psd_layers.api.layers import Layer
from psd_layers.exceptions import FormatError
from psd_layers.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="psd-layers command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser(
        "export", help="Export the flattened PSD or a layer as an image"
    )
    export_parser.add_argument(
        "input_file",
        help="Input PSD file (optionally with layer index, e.g. file.psd[0])",
    )
    export_parser.add_argument("output_file", help="Output image file")

    show_parser = subparsers.add_parser("show", help="Show the file content")
    show_parser.add_argument("input_file", help="Input PSD file")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logging.getLogger("psd_layers").setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    try:
        if args.command == "export":
            input_file, _, index = args.input_file.partition("[")
            try:
                layer_index = int(index.rstrip("]")) if index else None
            except ValueError:
                logger.error(
                    "%s: invalid layer index %r" % (args.input_file, index.rstrip("]"))
                )
                return 1
            image = DecodedImage.open(input_file)
            target: Union[DecodedImage, Layer] = image
            if layer_index is not None:
                try:
                    target = image[layer_index]
                except IndexError:
                    logger.error(
                        "%s: layer index %d out of range" % (input_file, layer_index)
                    )
                    return 1
            target_image = (
                target.composite() if isinstance(target, DecodedImage) else target.topil()
            )
            target_image.save(args.output_file)

        elif args.command == "show":
            image = DecodedImage.open(args.input_file)
            print(image)
            for index, layer in enumerate(image):
                print("  [%d] %r" % (index, layer))

    except FormatError as e:
        logger.error("%s: %s" % (args.input_file, e))
        return 1

    return None


if __name__ == "__main__":
    sys.exit(main())
