"""The QR Code generator application: menus, saved files and drawing."""

from __future__ import annotations

import argparse
import enum
import sys
from pathlib import Path
from typing import TextIO

from qrgen.ecc import Ecc
from qrgen.matrix import Mask
from qrgen.qrcode import QrCode, encode_text
from qrgen.segment import VERSION_MAX, VERSION_MIN

DISPLAY_WIDTH = 128
DISPLAY_HEIGHT = 64
SCALE = 2

#: Size of the text input buffer, including its terminating NUL.
TEXT_CAPACITY = 128

#: Light modules drawn around the symbol in text output.
QUIET_ZONE = 4

SAVED_EXTENSION = ".txt"
DEFAULT_FOLDER = Path("apps_data")

HEADER = "QRCode Generator"
README_TEXT = "QRCode Generator is a simple application to create QRCodes"

Box = tuple[int, int, int, int]


class MenuItem(enum.Enum):
    """Entries of the main menu, in the order they are shown."""

    GENERATE = "Generate"
    SAVED = "Saved"
    README = "README"


def write_text_to_file(path: str | Path, text: str) -> None:
    """Write ``text`` to ``path``, replacing any existing file."""
    Path(path).write_text(text, encoding="utf-8")


def read_text_from_file(path: str | Path) -> str:
    """Return the whole text of the file at ``path``."""
    return Path(path).read_text(encoding="utf-8")


def draw_qrcode(qrcode: QrCode) -> list[Box]:
    """Boxes (x, y, width, height) that draw ``qrcode`` centred on the display."""
    size = qrcode.size
    offset_x = DISPLAY_WIDTH // 2 - (size * SCALE) // 2
    offset_y = DISPLAY_HEIGHT // 2 - (size * SCALE) // 2
    return [
        (offset_x + x * SCALE, offset_y + y * SCALE, SCALE, SCALE)
        for y in range(size)
        for x in range(size)
        if qrcode.get_module(x, y)
    ]


def render_text(qrcode: QrCode) -> str:
    """The symbol as lines of text, two characters per module, with a quiet zone."""
    span = range(-QUIET_ZONE, qrcode.size + QUIET_ZONE)
    return "\n".join(
        "".join("██" if qrcode.get_module(x, y) else "  " for x in span)
        for y in span
    )


def _encode(text: str) -> QrCode:
    return encode_text(text, Ecc.LOW, VERSION_MIN, VERSION_MAX, Mask.AUTO, True)


class App:
    """The generator with its main menu, text input, saved files and readme."""

    def __init__(
        self,
        folder: str | Path = DEFAULT_FOLDER,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.folder = Path(folder)
        self.qrcode: QrCode | None = None
        self.text = ""
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    def generate(self, text: str) -> QrCode:
        """Encode ``text`` and make it the current code."""
        if len(text.encode("utf-8")) > TEXT_CAPACITY - 1:
            raise ValueError(f"text longer than {TEXT_CAPACITY - 1} bytes")
        self.text = text
        self.qrcode = _encode(text)
        return self.qrcode

    def open_saved(self, path: str | Path | None) -> QrCode | None:
        """Encode the selected saved file's path; None means nothing was selected."""
        if path is None:
            return None
        path = Path(path)
        if path.suffix != SAVED_EXTENSION:
            raise ValueError(f"saved files must end in {SAVED_EXTENSION}")
        if not path.is_file():
            raise FileNotFoundError(str(path))
        self.text = str(path)
        self.qrcode = _encode(self.text)
        return self.qrcode

    def readme(self) -> str:
        """The text shown on the README screen."""
        return README_TEXT

    def saved_files(self) -> list[Path]:
        """Saved files in the folder, sorted by name."""
        if not self.folder.is_dir():
            return []
        return sorted(p for p in self.folder.iterdir()
                      if p.is_file() and p.suffix == SAVED_EXTENSION)

    def run(self) -> int:
        """Run the main menu until the user goes back from it."""
        items = list(MenuItem)
        while True:
            self._print(HEADER)
            for number, item in enumerate(items, start=1):
                self._print(f"{number}. {item.value}")
            choice = self._prompt("> ")
            if choice is None or choice.strip().lower() in ("", "q", "back"):
                return 0
            try:
                item = items[int(choice) - 1]
                if int(choice) < 1:
                    raise IndexError
            except (ValueError, IndexError):
                self._print(f"Unknown choice: {choice}")
                continue
            if item is MenuItem.GENERATE:
                self._generate_scene()
            elif item is MenuItem.SAVED:
                self._saved_scene()
            else:
                self._print(self.readme())

    def _generate_scene(self) -> None:
        text = self._prompt("Enter text: ")
        if text is None:
            return
        try:
            qrcode = self.generate(text)
        except ValueError as err:
            self._print(str(err))
            return
        self._print(render_text(qrcode))

    def _saved_scene(self) -> None:
        files = self.saved_files()
        if not files:
            self._print(f"No {SAVED_EXTENSION} files in {self.folder}")
            return
        for number, path in enumerate(files, start=1):
            self._print(f"{number}. {path.name}")
        choice = self._prompt("> ")
        if choice is None or not choice.strip():
            return
        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError
            path = files[index]
        except (ValueError, IndexError):
            self._print(f"Unknown choice: {choice}")
            return
        qrcode = self.open_saved(path)
        if qrcode is not None:
            self._print(render_text(qrcode))

    def _prompt(self, prompt: str) -> str | None:
        self._stdout.write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if line == "":
            return None
        return line.rstrip("\n")

    def _print(self, text: str) -> None:
        self._stdout.write(text + "\n")


def main(argv: list[str] | None = None) -> int:
    """Print a QR Code for the given text, or start the interactive menu."""
    parser = argparse.ArgumentParser(prog="qrgen", description="Generate QR Codes.")
    parser.add_argument("--text", help="encode this text and print the symbol")
    parser.add_argument("--folder", default=str(DEFAULT_FOLDER),
                        help="folder holding saved .txt files")
    args = parser.parse_args(argv)
    app = App(args.folder)
    if args.text is not None:
        try:
            qrcode = app.generate(args.text)
        except ValueError as err:
            print(err, file=sys.stderr)
            return 1
        print(render_text(qrcode))
        return 0
    return app.run()


if __name__ == "__main__":
    sys.exit(main())