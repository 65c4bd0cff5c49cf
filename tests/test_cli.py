import pytest
from PIL import Image

from glyphfield.cli import build_content, main, parse_args
from glyphfield.core.content import DrawableContent, SymbolContent, TextContent


def test_default_content_is_text():
    content = build_content(parse_args([]))
    assert content == TextContent("Hello World")


def test_content_flags():
    assert isinstance(build_content(parse_args(["--symbol", "*"])), SymbolContent)
    assert isinstance(build_content(parse_args(["--image", "x.png"])), DrawableContent)


def test_headless_run_saves_png(tmp_path):
    out = tmp_path / "hi.png"
    code = main(["--text", "Hi", "--headless", "--frames", "5", "--count", "50",
                 "--size", "300", "200", "--seed", "1", "--save", str(out)])

    assert code == 0
    assert out.exists()


def test_transparent_image_fails_cleanly(tmp_path, capsys):
    path = tmp_path / "blank.png"
    Image.new("RGBA", (8, 8), (0, 0, 0, 0)).save(path)

    code = main(["--image", str(path), "--headless", "--frames", "1"])

    assert code == 1
    assert "Cannot draw" in capsys.readouterr().err


def test_missing_image_fails_cleanly(tmp_path, capsys):
    code = main(["--image", str(tmp_path / "nope.png"), "--headless", "--frames", "1"])

    assert code == 1
    assert "Cannot draw" in capsys.readouterr().err


def test_unreadable_image_fails_cleanly(tmp_path, capsys):
    path = tmp_path / "notes.png"
    path.write_text("not an image")

    code = main(["--image", str(path), "--headless", "--frames", "1"])

    assert code == 1
    assert "Cannot draw" in capsys.readouterr().err


@pytest.mark.parametrize("count", ["0", "-5"])
def test_count_below_one_is_rejected(count, capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--count", count])

    assert exc.value.code == 2
    assert "--count must be at least 1" in capsys.readouterr().err
