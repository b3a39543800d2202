from replicate_sdk.records.base import FrozenDict, FrozenList, Record
from replicate_sdk.records.mixins import Refreshable, Statusable
from replicate_sdk.records.model import Model
from replicate_sdk.records.model_version import ModelVersion
from replicate_sdk.records.prediction import Prediction
from replicate_sdk.records.training import Training
from replicate_sdk.records.upload import Upload

__all__ = [
    "FrozenDict",
    "FrozenList",
    "Model",
    "ModelVersion",
    "Prediction",
    "Record",
    "Refreshable",
    "Statusable",
    "Training",
    "Upload",
]
