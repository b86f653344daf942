from __future__ import annotations

import main


def test_serve_arguments() -> None:
    args = main.build_parser().parse_args(["serve", "--port", "9001"])
    assert args.func is main.serve
    assert args.port == 9001


def test_init_db_runs_against_configured_database(monkeypatch) -> None:
    seen = {}
    monkeypatch.setattr("app.db.init_db.init_db", lambda seed=True: seen.setdefault("seed", seed))
    main.main(["init-db", "--no-seed"])
    assert seen == {"seed": False}


def test_desktop_is_default(monkeypatch) -> None:
    monkeypatch.setattr(main, "desktop", lambda args: "opened " + args.api_url)
    assert main.main([]).startswith("opened http")
