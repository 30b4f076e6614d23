"""Week-over-week anomaly detection on pipeline trends."""

from __future__ import annotations

from devpilot.models.prediction import Anomaly, PipelineTrend

DURATION_CHANGE_THRESHOLD = 0.5
DURATION_HIGH_SEVERITY = 1.0
SUCCESS_RATE_THRESHOLD = 20.0
SUCCESS_RATE_HIGH_DROP = -30.0


def detect_anomalies(trends: list[PipelineTrend]) -> list[Anomaly]:
    anomalies: list[Anomaly] = []
    for week in trends:
        if week.prev_week_duration:
            change = (week.avg_duration - week.prev_week_duration) / week.prev_week_duration
            if abs(change) > DURATION_CHANGE_THRESHOLD:
                direction = "increased" if change > 0 else "decreased"
                anomalies.append(
                    Anomaly(
                        type="duration",
                        week=week.week,
                        change=change,
                        message=f"Pipeline duration {direction} by {abs(change) * 100:.0f}%",
                        severity="high" if abs(change) > DURATION_HIGH_SEVERITY else "medium",
                    )
                )

        if week.prev_week_success_rate is not None:
            change = week.success_rate - week.prev_week_success_rate
            if abs(change) > SUCCESS_RATE_THRESHOLD:
                direction = "dropped" if change < 0 else "improved"
                anomalies.append(
                    Anomaly(
                        type="success_rate",
                        week=week.week,
                        change=change,
                        message=f"Success rate {direction} by {abs(change):.0f}%",
                        severity="high" if change < SUCCESS_RATE_HIGH_DROP else "medium",
                    )
                )
    return anomalies
