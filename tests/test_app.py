import io

import pytest

from qrgen.app import (
    QUIET_ZONE,
    README_TEXT,
    App,
    draw_qrcode,
    main,
    read_text_from_file,
    render_text,
    write_text_to_file,
)
from qrgen.ecc import Ecc
from qrgen.qrcode import encode_text


def test_write_then_read_round_trip(tmp_path):
    path = tmp_path / "note.txt"
    write_text_to_file(path, "Hello, QR!")
    assert read_text_from_file(path) == "Hello, QR!"


def test_write_replaces_existing_file(tmp_path):
    path = tmp_path / "note.txt"
    write_text_to_file(path, "first long text")
    write_text_to_file(path, "second")
    assert read_text_from_file(path) == "second"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_text_from_file(tmp_path / "missing.txt")


def test_draw_qrcode_one_box_per_dark_module():
    qrcode = encode_text("HELLO")
    boxes = draw_qrcode(qrcode)
    dark = sum(sum(row) for row in qrcode.modules)
    assert len(boxes) == dark
    assert all(w == 2 and h == 2 for _, _, w, h in boxes)


def test_draw_qrcode_fits_display_for_version_1():
    qrcode = encode_text("HELLO")
    assert qrcode.size == 21
    boxes = draw_qrcode(qrcode)
    assert all(0 <= x and x + w <= 128 and 0 <= y and y + h <= 64 for x, y, w, h in boxes)
    # The top-left finder corner is always dark and sits at the centred offset.
    assert (64 - 21, 32 - 21, 2, 2) in boxes


def test_render_text_shape_and_content():
    qrcode = encode_text("HELLO")
    lines = render_text(qrcode).split("\n")
    width = qrcode.size + 2 * QUIET_ZONE
    assert len(lines) == width
    assert all(len(line) == 2 * width for line in lines)
    assert lines[0].strip() == ""
    assert lines[QUIET_ZONE][2 * QUIET_ZONE:2 * QUIET_ZONE + 2] == "██"


def test_generate_matches_low_ecc_encoding():
    app = App()
    qrcode = app.generate("https example text")
    assert qrcode == encode_text("https example text", Ecc.LOW)
    assert app.qrcode == qrcode
    assert app.text == "https example text"


def test_generate_rejects_text_over_buffer():
    app = App()
    app.generate("a" * 127)
    with pytest.raises(ValueError):
        app.generate("a" * 128)


def test_open_saved_encodes_path(tmp_path):
    path = tmp_path / "saved.txt"
    write_text_to_file(path, "content")
    app = App(tmp_path)
    qrcode = app.open_saved(path)
    assert qrcode == encode_text(str(path), Ecc.LOW)
    assert app.text == str(path)


def test_open_saved_none_selects_nothing():
    app = App()
    assert app.open_saved(None) is None
    assert app.qrcode is None


def test_open_saved_rejects_other_extension(tmp_path):
    path = tmp_path / "image.png"
    path.write_bytes(b"x")
    with pytest.raises(ValueError):
        App(tmp_path).open_saved(path)


def test_open_saved_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        App(tmp_path).open_saved(tmp_path / "gone.txt")


def test_readme_text():
    assert App().readme() == README_TEXT
    assert "QRCode Generator" in App().readme()


def test_run_generate_prints_symbol():
    out = io.StringIO()
    app = App(stdin=io.StringIO("1\nHI\nq\n"), stdout=out)
    assert app.run() == 0
    assert render_text(encode_text("HI")) in out.getvalue()
    assert app.qrcode == encode_text("HI")


def test_run_readme_then_eof():
    out = io.StringIO()
    app = App(stdin=io.StringIO("3\n"), stdout=out)
    assert app.run() == 0
    assert README_TEXT in out.getvalue()


def test_run_saved_lists_and_encodes(tmp_path):
    write_text_to_file(tmp_path / "b.txt", "b")
    write_text_to_file(tmp_path / "a.txt", "a")
    (tmp_path / "skip.md").write_text("x")
    out = io.StringIO()
    app = App(tmp_path, stdin=io.StringIO("2\n1\n\n"), stdout=out)
    assert app.saved_files() == [tmp_path / "a.txt", tmp_path / "b.txt"]
    assert app.run() == 0
    assert render_text(encode_text(str(tmp_path / "a.txt"))) in out.getvalue()


def test_run_unknown_choice_is_reported():
    out = io.StringIO()
    app = App(stdin=io.StringIO("9\n"), stdout=out)
    assert app.run() == 0
    assert "Unknown choice: 9" in out.getvalue()
    assert app.qrcode is None


def test_main_with_text(capsys):
    assert main(["--text", "HI"]) == 0
    assert render_text(encode_text("HI")) in capsys.readouterr().out


def test_main_text_too_long(capsys):
    assert main(["--text", "x" * 200]) == 1
    assert capsys.readouterr().out == ""