from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field, asdict

from .abstractions import DetailProfile, PriorityTag


@dataclass(frozen=True)
class IngredientDescriptor:
    """Data class representing one declared ingredient of a recipe"""
    root_token: str
    sub_path: Optional[str] = None
    steps: Tuple[Any, ...] = field(default=(), compare=False, repr=False)

    @property
    def spec(self) -> str:
        """The ingredient as written by the recipe author"""
        return f"{self.root_token}{self.sub_path or ''}"


@dataclass(frozen=True)
class RecipeDefinition:
    """Data class representing a registered provider and its static hints"""
    token: str
    name: str
    provider: Any
    ingredients: Tuple[IngredientDescriptor, ...]
    description: str = ""
    priority: Optional[PriorityTag] = None
    compressible: bool = False
    summary_recipe: Optional[str] = None
    detail_profiles: Dict[str, DetailProfile] = field(default_factory=dict)


@dataclass
class TraceDependency:
    """Data class representing one edge of a lineage trace"""
    token: str
    via: str


@dataclass
class TraceEntry:
    """Data class representing how a token is produced"""
    token: str
    provider_name: str
    deps: List[TraceDependency] = field(default_factory=list)


@dataclass(frozen=True)
class OrderItem:
    """Data class representing one requested token and its detail label"""
    token: str
    detail: Optional[str] = None


OrderLike = Union[str, OrderItem, Tuple[str, str], Dict[str, str]]


@dataclass(frozen=True)
class PriorityInfo:
    """Data class passed to priority rankers"""
    token: str
    recipe_name: str
    priority_tag: Optional[PriorityTag]
    index: int


RankPriority = Callable[[PriorityInfo], float]


@dataclass
class CompressionAttempt:
    """Data class representing the outcome of a best-effort compression"""
    ok: bool
    rendered: Optional[str] = None
    cost: Optional[int] = None
    note: Optional[str] = None
    error: Optional[BaseException] = None


@dataclass
class PreparedItem:
    """Data class representing a materialized, costed order item"""
    token: str
    detail: str
    index: int
    recipe_name: str
    baseline_rendered: str
    baseline_cost: int
    priority_score: float
    priority_tag: Optional[PriorityTag] = None
    compressed_rendered: Optional[str] = None
    compressed_cost: Optional[int] = None
    compression_note: Optional[str] = None
    lineage: List[TraceEntry] = field(default_factory=list)

    @property
    def has_compressed(self) -> bool:
        return self.compressed_rendered is not None and self.compressed_cost is not None

    @property
    def min_cost(self) -> int:
        if self.has_compressed:
            return min(self.baseline_cost, self.compressed_cost)
        return self.baseline_cost


@dataclass
class PlanDecision:
    """Data class representing the planner's verdict for one item"""
    include: bool
    forced: bool
    used_compressed: bool
    used_rendered: str
    used_cost: int
    reason: str


@dataclass
class PlateInfo:
    """Data class representing the provenance of one plated order item"""
    token: str
    decision: str
    reason: str
    served_detail: str
    priority_score: float
    was_compressed: bool
    original_cost: int
    cost: int
    running_total_before: int
    running_total_after: int
    priority_tag: Optional[PriorityTag] = None
    compression_note: Optional[str] = None
    compressed_cost: Optional[int] = None
    lineage: List[TraceEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CookResult:
    """Data class representing an explained cook call"""
    context: str
    total_tokens: int
    budget: Optional[int]
    plates: List[PlateInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Plate decisions
FORCED_INCLUDE = "forced-include"
INCLUDED = "included"
DROPPED = "dropped"
