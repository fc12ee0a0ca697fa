#!filepath: tests/test_cli.py
import pytest
from typer.testing import CliRunner

from mlscore import __version__
from mlscore.cli import app
from mlscore.models.serialization import model_digest

runner = CliRunner()


@pytest.fixture
def model_files(tmp_path, classifier_blob, regressor_blob):
    clf = tmp_path / "clf.model"
    reg = tmp_path / "reg.model"
    clf.write_bytes(classifier_blob)
    reg.write_bytes(regressor_blob)
    return clf, reg


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_features():
    result = runner.invoke(app, ["features", "1.0", "2.0", "3.0"])
    assert result.exit_code == 0
    assert '{"0":1.0,"1":2.0,"2":3.0}' in result.output


def test_features_too_many():
    result = runner.invoke(app, ["features"] + ["1"] * 11)
    assert result.exit_code == 1
    assert "ArityError" in result.output


def test_digest(model_files, classifier_blob):
    clf, _ = model_files
    result = runner.invoke(app, ["digest", str(clf)])
    assert result.exit_code == 0
    assert model_digest(classifier_blob).hex() in result.output


def test_inspect(model_files):
    _, reg = model_files
    result = runner.invoke(app, ["inspect", str(reg)])
    assert result.exit_code == 0
    assert "kind=regressor" in result.output
    assert "n_features=3" in result.output


def test_classify(model_files):
    clf, _ = model_files
    result = runner.invoke(app, ["classify", '{"0": 4.0}', str(clf)])
    assert result.exit_code == 0
    assert result.output.strip().splitlines()[-1] == "1"


def test_regress_kind_mismatch(model_files):
    clf, _ = model_files
    result = runner.invoke(app, ["regress", '{"0": 4.0}', str(clf)])
    assert result.exit_code == 1
    assert "KindMismatchError" in result.output


def test_missing_model_file(tmp_path):
    result = runner.invoke(app, ["classify", '{"0": 1.0}', str(tmp_path / "missing.model")])
    assert result.exit_code == 1
    assert "not found" in result.output
