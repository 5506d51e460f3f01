"""
Pass Manager Infrastructure

Runs function analysis passes over every function of a module. Passes are
configured by PassConfig entries, optionally loaded from JSON.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Any, TextIO
import json

from .ir import Function, Module, count_instructions


@dataclass
class PassConfig:
    """Configuration for a single pass."""
    name: str
    enabled: bool = True
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class PassMetrics:
    """Metrics collected by a pass during execution."""
    instructions: int = 0
    custom: dict[str, Any] = field(default_factory=dict)
    messages: list[str] = field(default_factory=list)


class FunctionPass(ABC):
    """Base class for passes that analyze one function at a time.

    Analyses never modify the function; run() returns the pass's result.
    """

    def __init__(self):
        self._metrics: Optional[PassMetrics] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the pass name for config matching."""
        pass

    @abstractmethod
    def run(self, func: Function, config: PassConfig) -> Any:
        """Analyze `func` and return the analysis result."""
        pass

    def get_metrics(self) -> Optional[PassMetrics]:
        """Return metrics from the last run, if collected."""
        return self._metrics

    def _init_metrics(self):
        """Initialize metrics for a new run."""
        self._metrics = PassMetrics()

    def _add_metric_message(self, msg: str):
        """Add a diagnostic message to metrics."""
        if self._metrics:
            self._metrics.messages.append(msg)


@dataclass
class PassManager:
    """Manages and runs function analysis passes.

    Results are collected per function name, then per pass name.
    """
    passes: list[FunctionPass] = field(default_factory=list)
    config: dict[str, PassConfig] = field(default_factory=dict)
    print_after_all: bool = False
    print_metrics: bool = False
    output: Optional[TextIO] = None

    def add_pass(self, p: FunctionPass) -> None:
        """Register a pass."""
        self.passes.append(p)

    def set_config(self, data: dict) -> None:
        """Load pass configs from an already-parsed JSON document."""
        for pass_name, opts in data.get("passes", {}).items():
            self.config[pass_name] = PassConfig(
                name=pass_name,
                enabled=opts.get("enabled", True),
                options=opts.get("options", {})
            )

    def load_config(self, config_path: str) -> None:
        """Load pass configs from JSON file."""
        with open(config_path) as f:
            data = json.load(f)
        self.set_config(data)

    def config_for(self, p: FunctionPass) -> PassConfig:
        return self.config.get(p.name, PassConfig(name=p.name))

    def _print_pass_metrics(self, p: FunctionPass, cfg: PassConfig, func: Function):
        """Print metrics for a pass execution."""
        out = self.output
        print(f"\n=== Pass: {p.name} ({func.name}) ===", file=out)
        print(f"Config: {', '.join(f'{k}={v}' for k, v in cfg.options.items()) or '(default)'}", file=out)
        print(f"Instructions: {count_instructions(func)}", file=out)

        metrics = p.get_metrics()
        if metrics:
            if metrics.custom:
                print(f"Custom metrics: {metrics.custom}", file=out)
            if metrics.messages:
                print("Diagnostics:", file=out)
                for msg in metrics.messages:
                    print(f"  - {msg}", file=out)

    def run_function(self, func: Function) -> dict[str, Any]:
        """Run all enabled passes on one function."""
        from .printing import print_function

        if self.print_after_all:
            print(f"=== IR: {func.name} ===", file=self.output)
            print_function(func, file=self.output)

        results: dict[str, Any] = {}
        for p in self.passes:
            cfg = self.config_for(p)
            if not cfg.enabled:
                if self.print_metrics:
                    print(f"\n=== Pass: {p.name} === (SKIPPED - disabled)", file=self.output)
                continue

            results[p.name] = p.run(func, cfg)

            if self.print_metrics:
                self._print_pass_metrics(p, cfg, func)

        return results

    def run(self, module: Module) -> dict[str, dict[str, Any]]:
        """Run all enabled passes on every function, in module order."""
        return {func.name: self.run_function(func) for func in module.functions}
