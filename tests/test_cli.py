import pytest

from bitmap_extraction.cli import docker
from bitmap_extraction.cli.extract_bitmaps import create_parser, main


def test_parser_defaults():
    args = create_parser().parse_args(['-i', 'a.lib'])
    assert args.input_path == ['a.lib']
    assert args.output_path is None
    assert args.pattern == '*.lib'
    assert not args.no_verify


def test_main_single_file(lib_file, capsys):
    main(['-i', str(lib_file)])

    out_dir = lib_file.parent / "textures_extracted"
    assert sorted(p.name for p in out_dir.iterdir()) == ["bitmap_0000.bmp", "bitmap_0001.bmp"]
    assert "2 bitmaps extracted" in capsys.readouterr().out


def test_main_folder_with_output(lib_file, tmp_path, capsys):
    out_root = tmp_path / "out"
    out_root.mkdir()

    main(['-i', str(lib_file.parent), '-o', str(out_root), '--no-verify'])

    assert (out_root / "textures_extracted" / "bitmap_0001.bmp").is_file()
    assert "Processing file 1 of 1" in capsys.readouterr().out


def test_main_missing_input_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(['-i', str(tmp_path / "missing.lib")])
    assert exc.value.code == 1
    assert "Source unavailable" in capsys.readouterr().err


def test_main_missing_output_exits(lib_file, tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(['-i', str(lib_file), '-o', str(tmp_path / "nowhere")])
    assert exc.value.code == 1


def test_docker_requires_input_path(capsys):
    assert docker.extract_with_env({}) == 1
    assert "INPUT_PATH" in capsys.readouterr().err


def test_docker_missing_input(tmp_path):
    env = {'INPUT_PATH': str(tmp_path / "missing.lib"), 'OUTPUT_PATH': str(tmp_path / "out")}
    assert docker.extract_with_env(env) == 1


def test_docker_extracts(lib_file, tmp_path):
    out = tmp_path / "out"
    env = {'INPUT_PATH': str(lib_file), 'OUTPUT_PATH': str(out), 'VERIFY_DECODE': 'no'}

    assert docker.extract_with_env(env) == 0
    assert (out / "textures_extracted" / "bitmap_0000.bmp").is_file()
