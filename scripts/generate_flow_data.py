import pandas as pd
import datetime
import random
import os
import sys

# Add project root to path to import schemas
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from enshi_traffic.common.schemas import FlowSample, WeatherObservation

# Simulation Configuration
NUM_DAYS = 14
SAMPLE_INTERVAL_MINUTES = 15
MONITORING_POINTS = {
    # Point ID : Typical free-flow speed (km/h)
    "PT_001": 45.0,
    "PT_002": 50.0,
    "PT_003": 70.0,
}
REGION_ID = "REGION_01"
START_DATE = datetime.datetime(2024, 6, 1)


def _is_commute(moment):
    return moment.isoweekday() <= 5 and moment.hour in (7, 8, 17, 18)


def generate_flow(num_days=NUM_DAYS):
    records = []
    steps = num_days * 24 * 60 // SAMPLE_INTERVAL_MINUTES

    for step in range(steps):
        moment = START_DATE + datetime.timedelta(minutes=step * SAMPLE_INTERVAL_MINUTES)

        for point_id, free_speed in MONITORING_POINTS.items():
            # Commute hours push flow up and speed down
            if _is_commute(moment):
                flow_rate = random.randint(700, 1100)
                average_speed = free_speed * random.uniform(0.45, 0.7)
                occupancy = random.uniform(25, 45)
            elif 0 <= moment.hour < 6:
                flow_rate = random.randint(40, 120)
                average_speed = free_speed * random.uniform(0.95, 1.1)
                occupancy = random.uniform(2, 6)
            else:
                flow_rate = random.randint(250, 600)
                average_speed = free_speed * random.uniform(0.8, 1.0)
                occupancy = random.uniform(8, 20)

            # Occasional incident: flow collapses for one interval
            if random.random() < 0.002:
                flow_rate = flow_rate // 4
                average_speed = average_speed / 3

            large = int(flow_rate * random.uniform(0.05, 0.15))
            medium = int(flow_rate * random.uniform(0.1, 0.2))
            spread = random.uniform(5, 15)

            record = {
                "point_id": point_id,
                "record_time": moment.isoformat(),
                "flow_rate": flow_rate,
                "average_speed": round(average_speed, 1),
                "occupancy_rate": round(occupancy, 1),
                "large_vehicle_count": large,
                "medium_vehicle_count": medium,
                "small_vehicle_count": flow_rate - large - medium,
                "max_speed": round(average_speed + spread, 1),
                "min_speed": round(max(0.0, average_speed - spread), 1),
                "direction": random.choice(["up", "down"]),
                "data_quality": random.randint(85, 100),
            }
            # Validate with Pydantic schema
            FlowSample(**record)
            records.append(record)

    return pd.DataFrame(records)


def generate_weather(num_days=NUM_DAYS):
    records = []
    for hour in range(num_days * 24):
        moment = START_DATE + datetime.timedelta(hours=hour)
        rainy = random.random() < 0.2
        foggy = moment.hour < 8 and random.random() < 0.3

        record = {
            "region_id": REGION_ID,
            "record_time": moment.isoformat(),
            "condition": "moderate-rain" if rainy else ("fog" if foggy else "cloudy"),
            "precipitation": round(random.uniform(5, 40), 1) if rainy else 0.0,
            "visibility": round(random.uniform(150, 900)) if foggy else round(random.uniform(3000, 12000)),
            "wind_speed": round(random.uniform(0.5, 12.0), 1),
            "temperature": round(random.uniform(14, 28), 1),
            "humidity": round(random.uniform(55, 98), 1),
            # Lowercase so the loader parses them as booleans
            "is_snow_ice": "false",
            "is_foggy": "true" if foggy else "false",
            "has_thunderstorm": "false",
        }
        WeatherObservation(**record)
        records.append(record)

    return pd.DataFrame(records)


def generate_data(num_days=NUM_DAYS, output_dir="data/metrics"):
    print(f"Generating {num_days} days of synthetic flow and weather records...")

    df_flow = generate_flow(num_days).sort_values(by=["record_time", "point_id"])
    df_weather = generate_weather(num_days)

    print(df_flow.head())
    print(df_flow.groupby("point_id")["flow_rate"].describe())

    os.makedirs(output_dir, exist_ok=True)
    df_flow.to_csv(os.path.join(output_dir, "flow_samples.csv"), index=False)
    df_weather.to_csv(os.path.join(output_dir, "weather.csv"), index=False)
    print(f"Datasets saved to {output_dir}")


if __name__ == "__main__":
    generate_data()
