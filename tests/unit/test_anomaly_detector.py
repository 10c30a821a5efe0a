import unittest
from datetime import datetime, timedelta

from enshi_traffic.anomaly import FlowAnomalyDetector, change_ratio, detect_anomalies
from enshi_traffic.common.schemas import FlowSample
from enshi_traffic.common.vocabulary import AnomalyMetric, AnomalyType


class TestFlowAnomalyDetector(unittest.TestCase):
    """Tests for FlowAnomalyDetector"""

    def setUp(self):
        self.now = datetime(2024, 6, 12, 12, 0)
        self.start = self.now - timedelta(hours=10)
        self.detector = FlowAnomalyDetector()

    def _series(self, flows, speeds=None):
        speeds = speeds or [50.0] * len(flows)
        return [
            FlowSample(
                point_id="PT_001",
                record_time=self.start + timedelta(minutes=15 * i),
                flow_rate=flow,
                average_speed=speed,
            )
            for i, (flow, speed) in enumerate(zip(flows, speeds))
        ]

    def test_single_flow_spike(self):
        samples = self._series([100] * 5 + [160] * 5)
        anomalies = self.detector.detect(samples, self.now)

        self.assertEqual(len(anomalies), 1)
        anomaly = anomalies[0]
        self.assertEqual(anomaly.metric, AnomalyMetric.FLOW)
        self.assertEqual(anomaly.anomaly_type, AnomalyType.SPIKE)
        self.assertEqual(anomaly.timestamp, samples[5].record_time)
        self.assertAlmostEqual(anomaly.change_ratio, 0.6)
        self.assertEqual(anomaly.change_percent, 60.0)
        self.assertEqual(anomaly.previous_value, 100)
        self.assertEqual(anomaly.current_value, 160)

    def test_too_few_samples(self):
        samples = self._series([100] * 4 + [160] * 5)
        self.assertEqual(self.detector.detect(samples, self.now), [])

    def test_threshold_is_exclusive(self):
        # +50% exactly is not an anomaly
        samples = self._series([100] * 5 + [150] * 5)
        self.assertEqual(self.detector.detect(samples, self.now), [])

    def test_flow_drop_and_speed_plunge(self):
        flows = [400] * 5 + [100] * 5
        speeds = [60.0] * 5 + [30.0] * 5
        anomalies = self.detector.detect(self._series(flows, speeds), self.now)

        kinds = [(a.metric, a.anomaly_type) for a in anomalies]
        self.assertEqual(kinds, [
            (AnomalyMetric.FLOW, AnomalyType.DROP),
            (AnomalyMetric.SPEED, AnomalyType.PLUNGE),
        ])
        self.assertEqual(anomalies[0].change_percent, -75.0)

    def test_speed_surge(self):
        speeds = [30.0] * 5 + [45.0] * 5
        anomalies = self.detector.detect(self._series([200] * 10, speeds), self.now)
        self.assertEqual(len(anomalies), 1)
        self.assertEqual(anomalies[0].anomaly_type, AnomalyType.SURGE)

    def test_adjacent_anomalies_not_merged(self):
        flows = [100, 100, 100, 100, 200, 100, 200, 100, 100, 100]
        anomalies = self.detector.detect(self._series(flows), self.now)
        # 100->200 spikes; 200->100 is -50%, not beyond the threshold
        self.assertEqual(len(anomalies), 2)
        self.assertTrue(all(a.anomaly_type == AnomalyType.SPIKE for a in anomalies))

    def test_zero_previous_value_is_ignored(self):
        samples = self._series([0] * 5 + [300] * 5)
        self.assertEqual(self.detector.detect(samples, self.now), [])

    def test_unsorted_input(self):
        samples = self._series([100] * 5 + [160] * 5)
        anomalies = self.detector.detect(list(reversed(samples)), self.now)
        self.assertEqual(len(anomalies), 1)
        self.assertEqual(anomalies[0].timestamp, samples[5].record_time)

    def test_samples_outside_window_dropped(self):
        detector = FlowAnomalyDetector(window=timedelta(hours=9))
        samples = self._series([100] * 5 + [160] * 5)
        # Only the last five samples fall inside a 9h window
        recent = [s for s in samples if s.record_time > self.now - detector.window]
        self.assertEqual(len(recent), 5)
        self.assertEqual(detector.detect(samples, self.now), [])

    def test_future_samples_ignored(self):
        samples = self._series([100] * 5 + [160] * 5)
        late = FlowSample(point_id="PT_001", record_time=self.now + timedelta(hours=1),
                          flow_rate=900, average_speed=50.0)
        anomalies = self.detector.detect(samples + [late], self.now)
        self.assertEqual(len(anomalies), 1)
        self.assertEqual(anomalies[0].current_value, 160)

        # Nine in-window samples plus a future one stay below the minimum
        self.assertEqual(self.detector.detect(samples[1:] + [late], self.now), [])

    def test_module_level_helper_ignores_future_samples(self):
        samples = self._series([100] * 9) + [FlowSample(
            point_id="PT_001", record_time=self.now + timedelta(days=1), flow_rate=500)]
        self.assertEqual(detect_anomalies(samples, self.now), [])

    def test_custom_thresholds(self):
        detector = FlowAnomalyDetector(min_samples=3, flow_change_threshold=0.1)
        anomalies = detector.detect(self._series([100, 100, 115]), self.now)
        self.assertEqual(len(anomalies), 1)

    def test_module_level_helper(self):
        samples = self._series([100] * 5 + [160] * 5)
        self.assertEqual(len(detect_anomalies(samples, self.now)), 1)

    def test_change_ratio(self):
        self.assertEqual(change_ratio(0, 50), 0.0)
        self.assertEqual(change_ratio(200, 100), -0.5)


if __name__ == '__main__':
    unittest.main()
