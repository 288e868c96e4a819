from dino_dash.__main__ import main


def test_headless_run_prints_final_info(capsys):
    assert main(["--headless", "--frames", "30", "--seed", "5", "--log-level", "WARNING"]) == 0
    out = capsys.readouterr().out
    assert "'score': 30" in out


def test_headless_autopilot(capsys):
    assert main(["--headless", "--autopilot", "--frames", "20", "--seed", "5", "--log-level", "WARNING"]) == 0
    assert "high_score" in capsys.readouterr().out
