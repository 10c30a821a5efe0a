import os
import sys
from datetime import datetime, timedelta

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from enshi_traffic.application import TrafficMetricsService
from enshi_traffic.common.config import ConfigManager
from enshi_traffic.common.exceptions import TrafficMetricsError
from enshi_traffic.common.logging import setup_logger
from enshi_traffic.common.schemas import PeakPeriodRule, RoadSegmentGeometry
from enshi_traffic.flow import summarize_window
from enshi_traffic.geometry import safety_hazards
from enshi_traffic.infrastructure import CSVSnapshotLoader, InMemoryTrafficRepository
from enshi_traffic.weather import driving_advice

logger = setup_logger("run_metrics")


def build_repository(cfg: DictConfig):
    loader = CSVSnapshotLoader(to_absolute_path(cfg.data.input_dir))
    flow_series = loader.load_flow_samples(cfg.data.flow_file)
    weather_series = loader.load_weather(cfg.data.weather_file)

    rules = [PeakPeriodRule(**OmegaConf.to_container(r)) for r in cfg.report.peak_rules]

    repository = InMemoryTrafficRepository()
    for section_cfg in cfg.report.sections:
        section = OmegaConf.to_container(section_cfg)
        point_ids = section.pop("point_ids", [])
        repository.add_section(
            RoadSegmentGeometry(**section),
            point_ids=point_ids,
            region_id=cfg.report.region_id,
            rules=rules,
        )
    for point_id, samples in flow_series.items():
        repository.add_samples(point_id, samples)
    for region_id, observations in weather_series.items():
        repository.add_weather(region_id, observations)
    return repository, flow_series


@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    settings = ConfigManager.from_dictconfig(cfg.metrics)
    logger.setLevel(settings.logging.level.upper())

    try:
        repository, flow_series = build_repository(cfg)
    except (FileNotFoundError, TrafficMetricsError) as e:
        logger.error(f"Could not load snapshots: {e}")
        print("Run scripts/generate_flow_data.py first to create sample data.")
        return

    if cfg.report.now:
        now = datetime.fromisoformat(cfg.report.now)
    else:
        # Just past the newest sample so it falls inside the current-flow window
        now = max(s[-1].record_time for s in flow_series.values() if s)
        now = now + timedelta(minutes=1)

    service = TrafficMetricsService(repository, settings)
    print(f"Metrics report at {now.isoformat()}\n")

    for section_cfg in cfg.report.sections:
        section_id = section_cfg.section_id
        metrics = service.derived_metrics(section_id, now)
        geometry = repository.geometry_for(section_id)

        print(f"== {section_id} ({geometry.name}) ==")
        print(metrics.model_dump_json(indent=2, exclude={"anomalies"}))
        for hazard in safety_hazards(geometry):
            print(f"  hazard: {hazard}")
        if metrics.weather_impact_index is not None:
            print(f"  advice: {driving_advice(metrics.weather_impact_index)}")

        print(f"  anomalies in the last {settings.windows.anomaly_days} days: {len(metrics.anomalies)}")
        for anomaly in metrics.anomalies[-5:]:
            print(f"    {anomaly.timestamp:%Y-%m-%d %H:%M} {anomaly.metric.value} "
                  f"{anomaly.anomaly_type.value} {anomaly.change_percent:+.1f}%")

        for point_id in repository.points_for(section_id):
            daily = service.average_daily_flow(point_id, now)
            ratio = service.peak_valley_ratio(point_id, now)
            summary = summarize_window(flow_series.get(point_id, []))
            print(f"  {point_id}: daily avg flow={daily if daily is None else round(daily, 1)} "
                  f"peak/valley={ratio if ratio is None else round(ratio, 2)} "
                  f"samples={summary.sample_count} large={summary.large_vehicle_percentage:.1f}%")
        print()


if __name__ == "__main__":
    main()
