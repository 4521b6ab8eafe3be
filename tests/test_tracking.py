import logging

import tttgame.tracking as T


def test_disabled_run_is_untracked():
    with T.maybe_mlflow_run(False, run_name="arena") as active:
        assert active is False
        T.log_params({"games": 1})
        T.log_metrics({"loss_rate": 0.0})


def test_missing_mlflow_warns_and_continues(monkeypatch, caplog):
    monkeypatch.setattr(T, "_mlflow", lambda: None)
    caplog.set_level(logging.WARNING)
    with T.maybe_mlflow_run(True, run_name="arena") as active:
        assert active is False
        T.log_metrics({"loss_rate": 0.0})
    assert "mlflow is not installed" in caplog.text
