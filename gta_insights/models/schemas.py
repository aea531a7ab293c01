from enum import Enum
from typing import List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models exchanged with the model API and the UI (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Analytics record ---

class ElementModel(WireModel):
    """Entry of a record list; keys outside the contract are kept as they came"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

class KeyPoint(ElementModel):
    """A headline insight about the location"""
    title: Optional[str] = None
    description: Optional[str] = None

class PopulationPoint(ElementModel):
    """One population figure; type tells historical data from projections"""
    year: Optional[int] = None
    population: Optional[Union[int, float]] = None
    type: Optional[str] = None

class SprawlPrediction(ElementModel):
    """Predicted urban sprawl pattern"""
    title: Optional[str] = None
    description: Optional[str] = None

class Hotspot(ElementModel):
    """Predicted growth hotspot; location_query can be fed back as a new location"""
    name: Optional[str] = None
    location_query: Optional[str] = None
    reason: Optional[str] = None

class AnalyticsRecord(WireModel):
    """Normalized urban-growth analysis for one location"""
    title: Optional[str] = None
    summary: Optional[str] = None
    key_points: List[KeyPoint] = Field(default_factory=list)
    population_trend: List[PopulationPoint] = Field(default_factory=list)
    urban_sprawl_predictions: List[SprawlPrediction] = Field(default_factory=list)
    predicted_hotspots: List[Hotspot] = Field(default_factory=list)

# Sequence fields by wire name; the normalizer defaults each of these to []
SEQUENCE_FIELDS = ("keyPoints", "populationTrend", "urbanSprawlPredictions", "predictedHotspots")


# --- Chat ---

class Role(str, Enum):
    USER = "user"
    MODEL = "model"

class ChatMessage(WireModel):
    """A single chat message. Immutable once created."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    role: Role
    text: str

class TurnPhase(str, Enum):
    AWAITING_SEND = "awaiting_send"
    TURN_APPENDED = "turn_appended"
    RESOLVED_SUCCESS = "resolved_success"
    RESOLVED_WITH_APOLOGY = "resolved_with_apology"

class ConversationState(WireModel):
    """Ordered chat history plus the in-flight flag for the current turn"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    messages: Tuple[ChatMessage, ...] = ()
    is_loading: bool = False
    phase: TurnPhase = TurnPhase.AWAITING_SEND


# --- Data fetch ---

class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"

class FetchState(WireModel):
    """Tri-state result of the latest insights request"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    status: FetchStatus = FetchStatus.IDLE
    location: Optional[str] = None
    data: Optional[AnalyticsRecord] = None
    error_message: Optional[str] = None
    error_kind: Optional[str] = None
    request_token: int = 0


# --- API requests / responses ---

class InsightsRequest(BaseModel):
    """Request for the analysis of one location"""
    location: str

    @field_validator('location')
    @classmethod
    def strip_location(cls, v):
        return v.strip()

class ChatRequest(BaseModel):
    """A user chat turn"""
    message: str

class ChatReply(WireModel):
    """Outcome of one chat turn"""
    reply: str
    failed: bool = False
    conversation: ConversationState
