# halaleco/services/supply_chain.py
from __future__ import annotations
import math
import random
import re
import time
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, List, Mapping

from ..ledger.adapter import MockLedger
from ..ledger.store import DAY_MS, FakeStore
from ..schemas import (
    Alert,
    ContaminationData,
    HalalComplianceCheck,
    IssueFrequency,
    StageInput,
    StagePerformance,
    SupplyChainAnalytics,
    SupplyChainRecord,
    SupplyChainStage,
    TrackingQuery,
    TrendData,
)
from ..utils.logging import logger
from .scoring import clamp

# -----------------------------
# Stage templates
# -----------------------------
STAGE_TEMPLATES: Mapping[str, Mapping] = MappingProxyType({
    "sourcing": {
        "name": "Raw Material Sourcing",
        "required_documents": ("certificate", "invoice"),
        "max_duration_days": 7,
    },
    "processing": {
        "name": "Processing & Manufacturing",
        "required_documents": ("inspection_report", "certificate"),
        "max_duration_days": 3,
    },
    "packaging": {
        "name": "Packaging & Labeling",
        "required_documents": ("inspection_report", "photo"),
        "max_duration_days": 1,
    },
    "distribution": {
        "name": "Distribution & Storage",
        "required_documents": ("invoice", "photo"),
        "max_duration_days": 14,
    },
    "retail": {
        "name": "Retail & Sale",
        "required_documents": ("photo",),
        "max_duration_days": 30,
    },
})

SAFE_TEMPERATURE = (0.0, 40.0)
HIGH_TEMPERATURE_ALERT = 35.0
INSPECTION_WARNING_DAYS = 7
MAX_RISK = 10
MAX_TREND_DAYS = 30

STATUS_RISK = {"non_compliant": 4, "flagged": 3, "pending": 1, "compliant": 0}
CONTAMINATION_RISK = {"high": 3, "medium": 2, "low": 1}
ISSUE_RISK = 0.5

LEDGER_AUTHORITY = "HalalEco Supply Chain"

# canned figures until there is a real store to aggregate
_STAGE_PERFORMANCE = (
    ("Sourcing", 98.2, 5.2, 12),
    ("Processing", 96.8, 2.8, 18),
    ("Packaging", 99.1, 0.8, 5),
    ("Distribution", 94.5, 8.2, 32),
    ("Retail", 97.3, 15.5, 15),
)
_COMMON_ISSUES = (
    ("Temperature deviation", 28, "medium"),
    ("Documentation delay", 22, "low"),
    ("Certification expiry", 15, "high"),
    ("Storage conditions", 12, "medium"),
    ("Transport delay", 8, "low"),
)

_WS = re.compile(r"\s+")


def template_for(stage_name: str) -> Mapping | None:
    return STAGE_TEMPLATES.get(_WS.sub("_", stage_name.lower()))


def stage_status(stage: SupplyChainStage) -> str:
    template = template_for(stage.name)
    if template is None:
        return "pending"

    verified = {d.type for d in stage.documents if d.verified}
    if not all(t in verified for t in template["required_documents"]):
        return "non_compliant"

    if not stage.halal_compliance.is_compliant:
        return "non_compliant"

    env = stage.environmental_data
    if env is not None:
        if env.contamination_risk == "high":
            return "flagged"
        lo, hi = SAFE_TEMPERATURE
        if env.temperature < lo or env.temperature > hi:
            return "flagged"

    return "compliant"


def overall_compliance(stages: List[SupplyChainStage]) -> bool:
    return all(s.status in ("compliant", "pending") for s in stages)


def stage_risk(stage: SupplyChainStage) -> float:
    risk = float(STATUS_RISK.get(stage.status, 0))
    if stage.environmental_data is not None:
        risk += CONTAMINATION_RISK.get(stage.environmental_data.contamination_risk, 0)
    risk += len(stage.halal_compliance.issues) * ISSUE_RISK
    return risk


def record_risk(stages: List[SupplyChainStage]) -> float:
    if not stages:
        return 0.0
    return clamp(sum(stage_risk(s) for s in stages) / len(stages), 0, MAX_RISK)


class SupplyChainTracker:
    """
    Builds and annotates supply-chain records.

    Records live nowhere: `store` fabricates them on lookup and the ledger only
    hands back placeholder hashes. `rng` feeds the analytics trend series.
    """

    def __init__(self, ledger: MockLedger, store: FakeStore | None = None,
                 rng: random.Random | None = None, clock: Callable[[], float] = time.time):
        self.ledger = ledger
        self.store = store or FakeStore(clock=clock)
        self.rng = rng or random.Random()
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    # ---- records ----
    def create_record(self, product_id: str, product_name: str, batch_number: str) -> SupplyChainRecord:
        now = self._now_ms()
        record = SupplyChainRecord(
            product_id=product_id,
            product_name=product_name,
            batch_number=batch_number,
            qr_code=f"HALAL-SC-{product_id}-{batch_number}-{now}",
            created_at=now,
            updated_at=now,
        )
        receipt = self.ledger.create_record({
            "productId": product_id,
            "certificationId": f"SC-{batch_number}",
            "authority": LEDGER_AUTHORITY,
            "expiryDate": self.ledger.certification_expiry(),
        })
        record.blockchain_hash = receipt.transaction_hash or ""
        logger.info("Supply chain record created product=%s batch=%s", product_id, batch_number)
        return record

    def add_stage(self, record_id: str, stage_data: StageInput) -> SupplyChainRecord:
        record = self.store.get_record(record_id)
        now = self._now_ms()

        stage = SupplyChainStage(
            id=f"{record_id}-{now}",
            name=stage_data.name or "Unknown Stage",
            location=stage_data.location or "Unknown Location",
            timestamp=now,
            certifier=stage_data.certifier or "Unknown Certifier",
            status="pending",
            documents=stage_data.documents,
            halal_compliance=stage_data.halal_compliance or HalalComplianceCheck(inspection_date=now),
            environmental_data=stage_data.environmental_data,
            quality_metrics=stage_data.quality_metrics,
        )
        stage.status = stage_status(stage)

        record.stages.append(stage)
        record.updated_at = now
        record.overall_compliance = overall_compliance(record.stages)
        record.risk_score = record_risk(record.stages)
        record.alerts.extend(self.stage_alerts(stage))

        logger.info(
            "Stage added record=%s stage=%r status=%s risk=%.2f",
            record_id, stage.name, stage.status, record.risk_score,
        )
        return record

    def stage_alerts(self, stage: SupplyChainStage) -> List[Alert]:
        now = self._now_ms()
        alerts: List[Alert] = []

        env = stage.environmental_data
        if env is not None and env.temperature > HIGH_TEMPERATURE_ALERT:
            alerts.append(Alert(
                id=f"TEMP-{now}", type="temperature", severity="high",
                message=f"High temperature detected: {env.temperature:g}°C",
                stage=stage.name, timestamp=now,
            ))

        due = stage.halal_compliance.next_inspection_due
        if due:
            days = (due - now) / DAY_MS
            if days <= INSPECTION_WARNING_DAYS:
                alerts.append(Alert(
                    id=f"CERT-{now}", type="certification",
                    severity="critical" if days <= 1 else "medium",
                    message=f"Certification inspection due in {math.ceil(days)} days",
                    stage=stage.name, timestamp=now,
                ))

        template = template_for(stage.name)
        if template is not None:
            age = (now - stage.timestamp) / DAY_MS
            if age > template["max_duration_days"]:
                alerts.append(Alert(
                    id=f"DELAY-{now}", type="delay", severity="medium",
                    message=f"Stage processing time exceeded: {age:.1f} days",
                    stage=stage.name, timestamp=now,
                ))

        return alerts

    # ---- lookups ----
    def track(self, query: TrackingQuery) -> SupplyChainRecord | None:
        if query.qr_code:
            return self.store.find_by_qr_code(query.qr_code)
        if query.blockchain_hash:
            return self.store.find_by_hash(query.blockchain_hash)
        if query.product_id or query.batch_number:
            return self.store.find_by_product(query.product_id, query.batch_number)
        return None

    # ---- incidents ----
    def detect_contamination(self, record_id: str, data: ContaminationData) -> List[Alert]:
        now = self._now_ms()
        alerts = [Alert(
            id=f"CONT-{now}", type="contamination", severity=data.severity,
            message=f"Contamination detected: {data.description}",
            stage=data.affected_stages[0], timestamp=now,
        )]
        if data.severity == "critical":
            for stage in data.affected_stages:
                alerts.append(Alert(
                    id=f"CONT-{now}-{stage}", type="contamination", severity="high",
                    message=f"Potential contamination in {stage} stage",
                    stage=stage, timestamp=now,
                ))

        logger.warning(
            "Contamination reported record=%s type=%s severity=%s stages=%s",
            record_id, data.type, data.severity, ",".join(data.affected_stages),
        )
        return alerts

    # ---- analytics ----
    def trend_data(self, start_ms: int, end_ms: int) -> List[TrendData]:
        days = math.ceil((end_ms - start_ms) / DAY_MS)
        out: List[TrendData] = []
        for i in range(max(0, min(days, MAX_TREND_DAYS))):
            day = datetime.fromtimestamp((start_ms + i * DAY_MS) / 1000, tz=timezone.utc)
            out.append(TrendData(
                date=day.strftime("%Y-%m-%d"),
                compliance_rate=round(90 + self.rng.random() * 10, 2),
                risk_score=round(1 + self.rng.random() * 3, 2),
                alert_count=self.rng.randrange(10),
            ))
        return out

    def generate_analytics(self, start_ms: int, end_ms: int) -> SupplyChainAnalytics:
        total, compliant = 1250, 1187
        return SupplyChainAnalytics(
            total_products=total,
            compliant_products=compliant,
            compliance_rate=round(compliant / total * 100, 2),
            average_risk_score=2.3,
            stage_performance=[
                StagePerformance(stage_name=n, compliance_rate=r, average_processing_time=t, issue_count=c)
                for n, r, t, c in _STAGE_PERFORMANCE
            ],
            common_issues=[
                IssueFrequency(issue=i, frequency=f, impact=impact)
                for i, f, impact in _COMMON_ISSUES
            ],
            trend_analysis=self.trend_data(start_ms, end_ms),
        )