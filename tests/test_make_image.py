from pathlib import Path
import sys

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from scripts.make_image import main


def test_make_image_png(tmp_path, capsys):
    out = tmp_path / "poster.png"
    rc = main([
        "--config", str(ROOT / "configs" / "default.yaml"),
        "--outfile", str(out),
        "--tiles-x", "8", "--tiles-y", "4", "--max_iter", "50",
    ])
    assert rc == 0
    assert out.exists()

    text = capsys.readouterr().out
    assert "color key (configured): [1, 2, 3, 4, 5, 9, 1000, 1550]" in text
    count_lines = [ln for ln in text.splitlines() if ln[:1].isdigit()]
    assert len(count_lines) == 9
    assert sum(int(ln.split(",")[1]) for ln in count_lines) == 32
    assert "[run] done." in text


def test_make_image_svg_with_derived_key(tmp_path, capsys):
    out = tmp_path / "poster.svg"
    rc = main([
        "--outfile", str(out),
        "--tiles-x", "12", "--tiles-y", "8", "--max_iter", "60",
        "--interior", "cap", "--derive-key",
    ])
    assert rc == 0
    assert out.exists()
    assert "color key (derived)" in capsys.readouterr().out


def test_make_image_missing_config(tmp_path, capsys):
    rc = main(["--config", str(tmp_path / "nope.yaml"), "--outfile", str(tmp_path / "x.png")])
    assert rc == 1
    assert "Config file not found" in capsys.readouterr().out


def test_make_image_format_overrides_suffix(tmp_path):
    out = tmp_path / "poster.out"
    rc = main([
        "--outfile", str(out), "--format", "png",
        "--tiles-x", "6", "--tiles-y", "4", "--max_iter", "40", "--derive-key",
    ])
    assert rc == 0
    with open(out, "rb") as f:
        assert f.read(8) == b"\x89PNG\r\n\x1a\n"
