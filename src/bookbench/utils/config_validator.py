"""
Configuration validation for benchmark runs.

This module provides validation for:
- Workload (interaction mix and sizing) configurations
- Benchmark sweep configurations
- Metrics output configurations
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

VALID_MODES = ("local", "remote")


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""
    pass


class WorkloadConfigValidator:
    """Validates workload tunables."""
    
    PERCENT_FIELDS = (
        'percent_rare_stock_manager_interaction',
        'percent_frequent_stock_manager_interaction',
    )
    
    COUNT_FIELDS = (
        'warm_up_runs',
        'num_books_to_add',
        'num_books_with_least_copies',
        'num_editor_picks_to_get',
        'num_books_to_buy',
    )
    
    # Copy counts the bookstore rejects when below one
    POSITIVE_FIELDS = (
        'num_add_copies',
        'num_book_copies_to_buy',
    )
    
    @classmethod
    def validate(cls, workload: Dict[str, Any]) -> List[str]:
        """Validate a complete set of workload tunables."""
        errors = []
        
        for name in cls.PERCENT_FIELDS:
            value = workload.get(name, 0)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                errors.append(f"{name} must be a number, got {value!r}")
            elif value < 0:
                errors.append(f"{name} must be non-negative, got {value}")
        
        if not errors:
            total = sum(workload.get(name, 0) for name in cls.PERCENT_FIELDS)
            if total > 100:
                errors.append(f"Stock manager interaction percentages sum to {total}, must not exceed 100")
        
        for name in cls.COUNT_FIELDS:
            value = workload.get(name, 0)
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value < 0:
                errors.append(f"{name} must be non-negative, got {value}")

        for name in cls.POSITIVE_FIELDS:
            value = workload.get(name, 0)
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value <= 0:
                errors.append(f"{name} must be positive, got {value}")

        num_actual_runs = workload.get('num_actual_runs')
        if not isinstance(num_actual_runs, int) or isinstance(num_actual_runs, bool) or num_actual_runs <= 0:
            errors.append(f"num_actual_runs must be a positive integer, got {num_actual_runs!r}")
        
        return errors


class BenchmarkConfigValidator:
    """Validates complete benchmark configuration."""
    
    @classmethod
    def validate(cls, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """Validate a benchmark configuration dict."""
        all_errors = []
        
        if not isinstance(config, dict):
            return False, ["Configuration must be a mapping"]
        
        unknown_sections = set(config.keys()) - {'benchmark', 'remote', 'workload', 'metrics_config'}
        if unknown_sections:
            all_errors.append(f"Unknown configuration sections: {sorted(unknown_sections)}")
        
        # An empty YAML section loads as None
        sections = {}
        for name in ('benchmark', 'remote', 'workload', 'metrics_config'):
            section = config.get(name) or {}
            if not isinstance(section, dict):
                all_errors.append(f"Section '{name}' must be a mapping, got {type(section).__name__}")
                section = {}
            sections[name] = section

        benchmark = sections['benchmark']
        all_errors.extend(cls._validate_benchmark(benchmark))
        all_errors.extend(cls._validate_workload(sections['workload']))

        modes = benchmark.get('modes', list(VALID_MODES))
        if 'remote' in modes and not sections['remote'].get('server_address'):
            logger.warning("Remote mode enabled without remote.server_address, using default")

        return len(all_errors) == 0, all_errors
    
    @classmethod
    def _validate_benchmark(cls, benchmark: Dict[str, Any]) -> List[str]:
        """Validate the sweep settings."""
        errors = []
        
        max_threads = benchmark.get('max_threads', 10)
        if not isinstance(max_threads, int) or max_threads <= 0:
            errors.append(f"Invalid benchmark max_threads: {max_threads}")
        
        threads_step = benchmark.get('threads_step', 1)
        if not isinstance(threads_step, int) or threads_step <= 0:
            errors.append(f"Invalid benchmark threads_step: {threads_step}")
        
        initial_num_books = benchmark.get('initial_num_books', 100)
        if not isinstance(initial_num_books, int) or initial_num_books < 0:
            errors.append(f"Invalid benchmark initial_num_books: {initial_num_books}")
        
        modes = benchmark.get('modes', list(VALID_MODES))
        if not modes:
            errors.append("At least one execution mode must be configured")
        for mode in modes:
            if mode not in VALID_MODES:
                errors.append(f"Invalid execution mode: {mode} (must be local/remote)")
        
        random_seed = benchmark.get('random_seed')
        if random_seed is not None and (not isinstance(random_seed, int) or random_seed < 0):
            errors.append(f"Invalid benchmark random_seed: {random_seed} (must be a non-negative integer)")

        local_test = benchmark.get('local_test')
        if local_test is not None and not isinstance(local_test, bool):
            errors.append(f"benchmark.local_test must be a boolean, got {local_test!r}")
        
        return errors
    
    @classmethod
    def _validate_workload(cls, workload: Dict[str, Any]) -> List[str]:
        """Validate the workload section against the configuration defaults."""
        from dataclasses import MISSING, fields
        
        from ..workload.models import WorkloadConfiguration
        
        defaults = {
            f.name: f.default for f in fields(WorkloadConfiguration)
            if f.default is not MISSING
        }
        
        unknown = set(workload.keys()) - set(defaults.keys())
        if unknown:
            return [f"Unknown workload parameters: {sorted(unknown)}"]
        
        return WorkloadConfigValidator.validate({**defaults, **workload})


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file based on its suffix."""
    config_file = Path(config_path)
    
    with open(config_file) as f:
        if config_file.suffix in ['.yaml', '.yml']:
            return yaml.safe_load(f) or {}
        return json.load(f)


def validate_config_file(config_path: str) -> Tuple[bool, List[str], Optional[Dict[str, Any]]]:
    """
    Load and validate a configuration file.
    
    Returns:
        (is_valid, errors, config)
    """
    config = load_config_file(config_path)
    
    is_valid, errors = BenchmarkConfigValidator.validate(config)
    
    if not is_valid:
        logger.warning(f"Configuration has {len(errors)} validation errors")
        for error in errors[:10]:
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")
    
    return is_valid, errors, config
