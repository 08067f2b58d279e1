"""Data models for workload execution."""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from ..bookstore.interfaces import StockManager, Store
from ..utils.config_validator import ConfigurationError, WorkloadConfigValidator
from .sampler import BookSetGenerator


@dataclass(frozen=True)
class WorkloadConfiguration:
    """Parameters shared read-only by the workers of one benchmark point.
    
    The store and stock manager are references; their lifecycle belongs to
    the driver.
    """
    
    book_store: Store
    stock_manager: StockManager
    book_set_generator: BookSetGenerator = field(default_factory=BookSetGenerator)
    
    # Interaction mix (percent); the remainder are customer interactions
    percent_rare_stock_manager_interaction: float = 10.0
    percent_frequent_stock_manager_interaction: float = 30.0
    
    warm_up_runs: int = 100
    num_actual_runs: int = 500
    
    # Rare stock manager interaction
    num_books_to_add: int = 5
    
    # Frequent stock manager interaction
    num_books_with_least_copies: int = 5
    num_add_copies: int = 10
    
    # Customer interaction
    num_editor_picks_to_get: int = 10
    num_books_to_buy: int = 5
    num_book_copies_to_buy: int = 1
    
    def __post_init__(self):
        errors = WorkloadConfigValidator.validate(self.tunables())
        if errors:
            raise ConfigurationError("; ".join(errors))
    
    def tunables(self) -> Dict[str, Any]:
        """Return the numeric parameters as a dict."""
        return {
            f.name: getattr(self, f.name) for f in fields(self)
            if f.name not in ("book_store", "stock_manager", "book_set_generator")
        }
    
    @classmethod
    def from_dict(
        cls,
        config: Dict[str, Any],
        book_store: Store,
        stock_manager: StockManager,
        seed: Optional[int] = None,
    ) -> "WorkloadConfiguration":
        """Build a configuration from a ``workload`` config section."""
        return cls(
            book_store=book_store,
            stock_manager=stock_manager,
            book_set_generator=BookSetGenerator(seed),
            **config,
        )


@dataclass(frozen=True)
class WorkerRunResult:
    """Outcome of one worker's measured phase."""
    
    successful_interactions: int
    elapsed_time_in_nano_secs: int
    total_runs: int
    successful_frequent_book_store_interaction_runs: int
    total_frequent_book_store_interaction_runs: int
    
    def __post_init__(self):
        if self.successful_interactions > self.total_runs:
            raise ValueError(
                f"successful_interactions ({self.successful_interactions}) "
                f"exceeds total_runs ({self.total_runs})"
            )
        if self.successful_frequent_book_store_interaction_runs > self.total_frequent_book_store_interaction_runs:
            raise ValueError(
                "successful customer interactions exceed attempted customer interactions"
            )
    
    @property
    def success_rate(self) -> float:
        return self.successful_interactions / self.total_runs if self.total_runs > 0 else 0.0
