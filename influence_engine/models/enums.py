from enum import Enum


class AnalysisMode(str, Enum):
    BUSINESS = "business"
    BLOGGER = "blogger"


class ScenarioKind(str, Enum):
    ACTIVITY = "activity"
    ENGAGEMENT = "engagement"
    COLLABORATION = "collaboration"
    EDUCATION = "education"
    CUSTOM = "custom"


class OptimalityMode(str, Enum):
    NORMALIZED = "normalized"
    RAW = "raw"
