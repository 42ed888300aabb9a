from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Category = Literal["meat", "dairy", "processed", "cosmetics", "pharmaceutical"]
Severity = Literal["low", "medium", "high", "critical"]


class CamelModel(BaseModel):
    # wire format is camelCase; python side stays snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def _price_to_str(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


# -----------------------------
# Auth
# -----------------------------
class LoginInput(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterInput(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    company: Optional[str] = None
    industry: Optional[str] = None


class UserOut(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str = "user"


class AuthResponse(CamelModel):
    success: bool = True
    message: str
    token: str
    user: UserOut


# -----------------------------
# Halal validation / compliance
# -----------------------------
class ValidationRequest(CamelModel):
    product: str = Field(min_length=1)
    ingredients: List[str]
    certification_id: Optional[str] = None
    supplier: Optional[str] = None
    price: Optional[str] = None
    seller_rating: Optional[float] = None

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, v: Any) -> Any:
        return _price_to_str(v)


class HalalComplianceRequest(ValidationRequest):
    certification_image: Optional[str] = None
    category: Optional[Category] = None
    slaughter_method: Optional[str] = None
    origin: Optional[str] = None


class HalalValidationResponse(CamelModel):
    is_halal_compliant: bool
    haram_ingredients: List[str]
    certification_authority: str
    blockchain_verification_link: str
    confidence_score: int
    recommended_alternatives: List[str]
    risk_score: int
    red_flags: List[str]
    recommended_action: Literal["allow", "flag", "block"]


class IngredientAnalysis(CamelModel):
    ingredient: str
    status: Literal["halal", "haram", "mushbooh", "unknown"]
    reason: str
    alternatives: Optional[List[str]] = None


class CertificationStatus(CamelModel):
    is_valid: bool
    authority: str
    expiry_date: Optional[str] = None
    verification_method: Literal["ledger", "pattern", "manual"]
    trust_score: int


class SlaughterCompliance(CamelModel):
    method: str
    is_compliant: bool
    requirements: List[str]
    certifying_body: Optional[str] = None


class RiskFactor(CamelModel):
    factor: str
    impact: int
    description: str


class RiskAssessment(CamelModel):
    overall_risk: int
    factors: List[RiskFactor]
    recommendation: Literal["approve", "review", "reject"]


class ComplianceDetails(CamelModel):
    ingredient_analysis: List[IngredientAnalysis]
    certification_status: CertificationStatus
    slaughter_compliance: Optional[SlaughterCompliance] = None


class HalalComplianceResponse(CamelModel):
    is_halal_compliant: bool
    haram_ingredients: List[str]
    certification_authority: str
    blockchain_tx_hash: str
    blockchain_verification_link: str
    confidence_score: int
    recommended_alternatives: List[str]
    compliance_details: ComplianceDetails
    risk_assessment: RiskAssessment


# -----------------------------
# Fraud detection
# -----------------------------
class SellerHistory(CamelModel):
    account_age: float = 0  # days
    total_sales: int = 0
    return_rate: float = 0  # percent
    complaint_count: int = 0


class FraudDetectionRequest(CamelModel):
    product_id: str = Field(min_length=1)
    product_name: str = Field(min_length=1)
    price: str = Field(min_length=1)
    seller_rating: float
    seller_history: SellerHistory
    certification_image: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    product_images: List[str] = Field(default_factory=list)
    description: str = ""
    category: str = ""
    supplier: Optional[str] = None
    location: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, v: Any) -> Any:
        return _price_to_str(v)


class RedFlag(CamelModel):
    type: Literal["price", "seller", "image", "text", "certification", "pattern"]
    severity: Severity
    description: str
    evidence: str
    impact: int


class PriceAnalysis(CamelModel):
    market_price: float
    price_deviation: float
    is_price_suspicious: bool
    price_category: Literal["very_low", "low", "normal", "high", "very_high"]
    competitor_prices: List[float]


class SellerAnalysis(CamelModel):
    trust_score: int
    risk_factors: List[str]
    account_flags: List[str]
    behavior_pattern: Literal["normal", "suspicious", "fraudulent"]
    verification_status: bool


class ImageAnalysis(CamelModel):
    is_authentic: bool
    duplicate_detected: bool
    quality_score: float
    manipulation_detected: bool
    certification_image_valid: bool
    suspicious_elements: List[str]


class ClaimVerification(CamelModel):
    claim: str
    is_verifiable: bool
    confidence: int
    evidence: Optional[str] = None


class TextAnalysis(CamelModel):
    language_quality: int
    grammar_score: int
    suspicious_keywords: List[str]
    claims_verification: List[ClaimVerification]
    sentiment_score: float


class CertificationAnalysis(CamelModel):
    has_valid_certification: bool
    certification_authority: str
    certification_expiry: Optional[str] = None
    image_authenticity: float
    blockchain_verified: bool
    suspicious_elements: List[str]


class DetailedAnalysis(CamelModel):
    price_analysis: PriceAnalysis
    seller_analysis: SellerAnalysis
    image_analysis: ImageAnalysis
    text_analysis: TextAnalysis
    certification_analysis: CertificationAnalysis


class FraudDetectionResponse(CamelModel):
    risk_score: int
    risk_level: Severity
    red_flags: List[RedFlag]
    recommended_action: Literal["approve", "flag", "block", "manual_review"]
    confidence: float
    fraud_probability: float
    detailed_analysis: DetailedAnalysis
    recommendations: List[str]


# -----------------------------
# Blockchain
# -----------------------------
class VerifyCertificationInput(CamelModel):
    certification_id: str = Field(min_length=1)


class CreateRecordInput(CamelModel):
    product_id: str = Field(min_length=1)
    certification_id: str = Field(min_length=1)
    authority: str = Field(min_length=1)
    expiry_date: str = Field(min_length=1)


# -----------------------------
# Supply chain
# -----------------------------
StageStatus = Literal["compliant", "non_compliant", "pending", "flagged"]


class Document(CamelModel):
    type: Literal["certificate", "invoice", "inspection_report", "photo", "video"]
    url: str = ""
    hash: str = ""
    verified: bool = False
    uploaded_by: str = ""
    timestamp: int = 0


class HalalComplianceCheck(CamelModel):
    is_compliant: bool = False
    certification_id: Optional[str] = None
    inspector: str = "Pending"
    inspection_date: int = 0
    issues: List[str] = Field(default_factory=list)
    correction_actions: List[str] = Field(default_factory=list)
    next_inspection_due: Optional[int] = None  # epoch ms


class EnvironmentalData(CamelModel):
    temperature: float
    humidity: float = 0
    storage_conditions: str = ""
    transport_conditions: str = ""
    contamination_risk: Literal["low", "medium", "high"] = "low"


class QualityMetrics(CamelModel):
    freshness: float = 0
    appearance: float = 0
    packaging: float = 0
    overall_quality: float = 0


class StageInput(CamelModel):
    name: Optional[str] = None
    location: Optional[str] = None
    certifier: Optional[str] = None
    documents: List[Document] = Field(default_factory=list)
    halal_compliance: Optional[HalalComplianceCheck] = None
    environmental_data: Optional[EnvironmentalData] = None
    quality_metrics: Optional[QualityMetrics] = None


class SupplyChainStage(CamelModel):
    id: str
    name: str
    location: str
    timestamp: int
    certifier: str
    status: StageStatus
    documents: List[Document]
    halal_compliance: HalalComplianceCheck
    environmental_data: Optional[EnvironmentalData] = None
    quality_metrics: Optional[QualityMetrics] = None


class Alert(CamelModel):
    id: str
    type: Literal["contamination", "temperature", "certification", "delay"]
    severity: Severity
    message: str
    stage: str
    timestamp: int
    resolved: bool = False
    resolution_notes: Optional[str] = None


class SupplyChainRecord(CamelModel):
    product_id: str
    product_name: str
    batch_number: str
    stages: List[SupplyChainStage] = Field(default_factory=list)
    current_stage: str = "sourcing"
    overall_compliance: bool = True
    risk_score: float = 0
    alerts: List[Alert] = Field(default_factory=list)
    blockchain_hash: str = ""
    qr_code: str = ""
    created_at: int
    updated_at: int


class TrackingQuery(CamelModel):
    product_id: Optional[str] = None
    batch_number: Optional[str] = None
    qr_code: Optional[str] = None
    blockchain_hash: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.product_id or self.batch_number or self.qr_code or self.blockchain_hash)


class ContaminationData(CamelModel):
    type: str
    severity: Severity
    affected_stages: List[str] = Field(min_length=1)
    description: str


class AnalyticsAction(CamelModel):
    action: str
    data: Dict[str, Any] = Field(default_factory=dict)


class StagePerformance(CamelModel):
    stage_name: str
    compliance_rate: float
    average_processing_time: float
    issue_count: int


class IssueFrequency(CamelModel):
    issue: str
    frequency: int
    impact: Literal["low", "medium", "high"]


class TrendData(CamelModel):
    date: str
    compliance_rate: float
    risk_score: float
    alert_count: int


class SupplyChainAnalytics(CamelModel):
    total_products: int
    compliant_products: int
    compliance_rate: float
    average_risk_score: float
    stage_performance: List[StagePerformance]
    common_issues: List[IssueFrequency]
    trend_analysis: List[TrendData]
