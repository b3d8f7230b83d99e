import logging
from typing import List

from fastapi import FastAPI, File, UploadFile

from api.schemas import (
    BatchClassificationResponse,
    ClassificationResponse,
    VocabularyResponse,
)
from pipeline.dataset_classifier import classify_dataset, read_failure
from pipeline.vocabulary import CYBER_KEYWORDS, PATTERN_TABLE
from preprocessor.helpers import load_settings

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Cybersecurity Dataset Classifier",
    version="1.0.0"
)


def _classify_upload(file: UploadFile) -> ClassificationResponse:
    filename = file.filename or ""
    try:
        content = file.file.read()
    except OSError as e:
        result = read_failure(filename, f"Error reading file: {e}")
    else:
        result = classify_dataset(content, filename, **settings.classifier_options())

    return ClassificationResponse(filename=filename, **result.to_dict())


@app.get("/")
def root():
    return {"status": "Dataset classifier API running"}


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "service": "dataset-classifier",
        "calibration": settings.calibration,
        "keywords": len(CYBER_KEYWORDS),
        "patterns": len(PATTERN_TABLE)
    }


@app.get("/vocabulary", response_model=VocabularyResponse)
def vocabulary():
    return {
        "keywords": list(CYBER_KEYWORDS),
        "patterns": [
            {"id": pattern_id, "regex": regex.pattern}
            for pattern_id, regex in PATTERN_TABLE
        ]
    }


@app.post("/classify", response_model=ClassificationResponse)
def classify(file: UploadFile = File(...)):
    # failures come back as a negative verdict, never as a server error
    return _classify_upload(file)


@app.post("/classify/batch", response_model=BatchClassificationResponse)
def classify_batch(files: List[UploadFile] = File(...)):
    results = [_classify_upload(f) for f in files]
    related = sum(1 for r in results if r.is_cybersecurity_related)

    logger.info("Batch classification: %d files, %d related", len(results), related)

    return {
        "total_files": len(results),
        "related_files": related,
        "rejected_files": len(results) - related,
        "results": results
    }
