from pydantic import BaseModel
from typing import Dict, Any, List


class ClassificationResponse(BaseModel):
    filename: str = ""
    is_cybersecurity_related: bool
    confidence: float
    matched_keywords: List[str]
    matched_patterns: List[str]
    debug_info: Dict[str, Any]


class BatchClassificationResponse(BaseModel):
    total_files: int
    related_files: int
    rejected_files: int
    results: List[ClassificationResponse]


class PatternInfo(BaseModel):
    id: str
    regex: str


class VocabularyResponse(BaseModel):
    keywords: List[str]
    patterns: List[PatternInfo]
