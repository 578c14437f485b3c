import logging

import pytest

from collage_tools.__main__ import main
from collage_tools.api.project import Project

from .utils import grid

logger = logging.getLogger(__name__)


@pytest.fixture
def project_path(tmp_path) -> str:
    project = Project("cli", 1, 2)
    project.add_layer("top")
    project.add_image_to_layer("top", grid([(10, 20, 30, 255)]), 0, 0)
    path = str(tmp_path / "cli.txt")
    project.save(path)
    return path


@pytest.mark.parametrize("argv", [["-h"], ["--version"], []])
def test_main_exits(argv) -> None:
    with pytest.raises(SystemExit):
        main(argv)


@pytest.mark.parametrize("output", ["out.png", "out.ppm"])
def test_export(project_path, tmp_path, output) -> None:
    path = tmp_path / output
    assert main(["export", project_path, str(path)]) is None
    assert path.exists()


def test_show(project_path, capsys) -> None:
    assert main(["--verbose", "show", project_path]) is None
    captured = capsys.readouterr()
    assert "cli" in captured.out
    assert "'top'" in captured.out


def test_run(tmp_path) -> None:
    script = tmp_path / "script.txt"
    output = tmp_path / "out.png"
    script.write_text("new-project 2 2\nadd-layer top\nsave-image %s\n" % output)
    assert main(["run", str(script)]) is None
    assert output.exists()


def test_run_with_failures(tmp_path) -> None:
    script = tmp_path / "script.txt"
    script.write_text("add-layer top\n")
    assert main(["run", str(script)]) == 1


def test_missing_file(tmp_path) -> None:
    assert main(["show", str(tmp_path / "missing.txt")]) == 1
    assert main(["run", str(tmp_path / "missing.txt")]) == 1
