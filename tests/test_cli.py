import json

from mandelthing import __main__ as cli


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.settings == "mandelthing.json"
    assert args.width is None and args.height is None and args.max_depth is None
    assert args.palette == "Blue"


def test_invalid_size_exits_before_starting(tmp_path, monkeypatch):
    started = []
    monkeypatch.setattr(cli, "run", lambda *a, **kw: started.append(a))

    code = cli.main(["--settings", str(tmp_path / "none.json"), "--width", "0"])

    assert code == 2
    assert started == []


def test_cli_overrides_settings(tmp_path, monkeypatch):
    path = tmp_path / "mandelthing.json"
    path.write_text(json.dumps({"maxdepth": 100, "width": 320, "height": 200}))
    started = []
    monkeypatch.setattr(cli, "run", lambda config, palette: started.append(config))

    code = cli.main(["--settings", str(path), "--max-depth", "50", "--palette", "Red"])

    assert code == 0
    assert (started[0].width, started[0].height, started[0].max_depth) == (320, 200, 50)


def test_out_of_range_settings_fall_back_to_defaults(tmp_path, monkeypatch):
    path = tmp_path / "mandelthing.json"
    path.write_text(json.dumps({"maxdepth": 1, "width": 320}))
    started = []
    monkeypatch.setattr(cli, "run", lambda config, palette: started.append(config))

    code = cli.main(["--settings", str(path)])

    assert code == 0
    assert (started[0].width, started[0].height, started[0].max_depth) == (320, 480, 256)
