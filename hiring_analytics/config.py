"""Dashboard configuration: loader behaviour and SLA thresholds."""

from dataclasses import dataclass, field
from pathlib import Path

from hiring_analytics.utils.io import load_toml_config

type ConfigDict = dict[str, str | int | bool | list[str]]


@dataclass(frozen=True)
class SLAPolicy:
    sourcing_to_screening_hours: float = 48
    feedback_hours: float = 48
    time_to_hire_days: int = 30
    time_to_fill_days: int = 60


@dataclass(frozen=True)
class LoaderConfig:
    header_anchor: str = "Sr No."
    header_scan_lines: int = 10
    require_header: bool = False
    expected_round_slots: int = 3


@dataclass(frozen=True)
class DashboardConfig:
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    sla: SLAPolicy = field(default_factory=SLAPolicy)
    tracker_path: Path = Path("TA Tracker - HM Sheet.csv")


DEFAULT_SLA_POLICY = SLAPolicy()
DEFAULT_LOADER_CONFIG = LoaderConfig()


def load_dashboard_config(profile: str = "default") -> DashboardConfig:
    match profile:
        case "default":
            loader = LoaderConfig()
        case "strict":
            loader = LoaderConfig(require_header=True)
        case "lenient":
            loader = LoaderConfig(header_scan_lines=50)
        case other:
            raise ValueError(f"Unknown profile: {other}")

    return DashboardConfig(loader=loader, sla=SLAPolicy())


def apply_overrides(config: DashboardConfig, overrides: ConfigDict) -> DashboardConfig:
    """Layer ``[tool.hiring_analytics]`` / YAML settings over a profile."""
    sla = SLAPolicy(
        sourcing_to_screening_hours=float(
            overrides.get("sourcing_to_screening_hours", config.sla.sourcing_to_screening_hours)
        ),
        feedback_hours=float(overrides.get("feedback_hours", config.sla.feedback_hours)),
        time_to_hire_days=int(overrides.get("time_to_hire_days", config.sla.time_to_hire_days)),
        time_to_fill_days=int(overrides.get("time_to_fill_days", config.sla.time_to_fill_days)),
    )
    loader = LoaderConfig(
        header_anchor=str(overrides.get("header_anchor", config.loader.header_anchor)),
        header_scan_lines=int(overrides.get("header_scan_lines", config.loader.header_scan_lines)),
        require_header=bool(overrides.get("require_header", config.loader.require_header)),
        expected_round_slots=config.loader.expected_round_slots,
    )
    tracker_path = Path(str(overrides.get("tracker_path", config.tracker_path)))
    return DashboardConfig(loader=loader, sla=sla, tracker_path=tracker_path)


def get_env_config() -> ConfigDict:
    """Read dashboard settings from pyproject.toml."""
    pyproject = Path(__file__).parent.parent / "pyproject.toml"
    if not pyproject.exists():
        return {}
    data = load_toml_config(pyproject)
    return data.get("tool", {}).get("hiring_analytics", {})
