#!filepath: tests/models/test_model_kind.py
import pytest

from mlscore.features.codec import FeatureVector
from mlscore.models.base import Classifier, ModelKind, Regressor
from mlscore.utils.errors import KindMismatchError


def test_classifier_scores_int(classifier_estimator):
    model = Classifier(estimator=classifier_estimator, n_features=3)

    assert model.kind is ModelKind.CLASSIFIER
    assert model.classify(FeatureVector({0: 5.0})) == 1
    assert model.classify(FeatureVector({0: -5.0})) == 0
    assert isinstance(model.classify(FeatureVector({0: 5.0})), int)


def test_regressor_scores_float(regressor_estimator):
    model = Regressor(estimator=regressor_estimator, n_features=3)

    assert model.kind is ModelKind.REGRESSOR
    value = model.regress(FeatureVector({0: 1.0, 1: 2.0, 2: 3.0}))
    assert isinstance(value, float)
    assert value == pytest.approx(1.5)


def test_kind_checked_accessors(classifier_estimator, regressor_estimator):
    clf = Classifier(estimator=classifier_estimator, n_features=3)
    reg = Regressor(estimator=regressor_estimator, n_features=3)

    assert clf.as_classifier() is clf
    assert reg.as_regressor() is reg

    with pytest.raises(KindMismatchError) as ei:
        clf.as_regressor()
    assert ei.value.expected is ModelKind.REGRESSOR
    assert ei.value.actual is ModelKind.CLASSIFIER
    assert "regressor" in str(ei.value) and "classifier" in str(ei.value)

    with pytest.raises(KindMismatchError):
        reg.as_classifier()


def test_model_is_frozen(classifier_estimator):
    model = Classifier(estimator=classifier_estimator, n_features=3)
    with pytest.raises(AttributeError):
        model.n_features = 4
