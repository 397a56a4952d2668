import math
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_serializer,
)

_MODEL_CONFIG = ConfigDict(
    validate_by_name=True,
    validate_by_alias=True,
)


class Address(BaseModel):
    model_config = _MODEL_CONFIG

    line_one: str = Field(default="", alias="lineOne")
    line_two: str = Field(default="", alias="lineTwo")
    line_three: str = Field(default="", alias="lineThree")
    city_name: str = Field(default="", alias="cityName")
    country_sub_division_code: str = Field(default="", alias="countrySubDivisionCode")
    country_code: str = Field(default="", alias="countryCode")
    postal_code: str = Field(default="", alias="postalCode")


class Contact(BaseModel):
    model_config = _MODEL_CONFIG

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    job_title: str = Field(default="", alias="jobTitle")
    telephone: str = Field(default="", alias="telephone")
    email: str = Field(default="", alias="email")
    website: str = Field(default="", alias="website")


class Company(BaseModel):
    model_config = _MODEL_CONFIG

    name: str = Field(default="", alias="name")
    location: Address = Field(default_factory=Address, alias="location")
    contact: Contact = Field(default_factory=Contact, alias="contact")


# Extension fields the quoting service fills with "" or 0 when not applicable;
# they are left out of serialized output instead of being emitted as null.
_OMIT_WHEN_UNSET = (
    "parent_line_number",
    "magic_key",
    "requested_start_date",
    "initial_term",
    "auto_renewal_term",
    "billing_model",
    "charge_type",
    "unit_of_measurement",
    "additional_item_info",
    "pricing_term",
    "remaining_term",
    "subscription_reference_id",
)


class LineItem(BaseModel):
    """A single quote line with pricing, discounts and service terms.

    ``service_duration_months`` and ``lead_time_days`` serialize a zero value
    as ``null``; extension fields that were not populated upstream are omitted
    from serialized output altogether.
    """

    model_config = _MODEL_CONFIG

    line_number: str = Field(default="", alias="lineNumber")
    part_number: str = Field(default="", alias="partNumber")
    description: str = Field(default="", alias="description")
    ccw_line_number: str = Field(default="", alias="ccwLineNumber")
    unit_net_price_before_credits: float = Field(
        default=0.0, alias="unitNetPriceBeforeCredits"
    )
    unit_net_price: float = Field(default=0.0, alias="unitNetPrice")
    original_unit_list_price: float = Field(default=0.0, alias="originalUnitListPrice")
    quantity: int = Field(default=0, alias="quantity")
    unit_price: float = Field(default=0.0, alias="unitPrice")
    extended_amount: float = Field(default=0.0, alias="extendedAmount")
    total_amount: float = Field(default=0.0, alias="totalAmount")
    total_discount: float = Field(default=0.0, alias="totalDiscount")
    standard_discount: float = Field(default=0.0, alias="standardDiscount")
    promotional_discount: float = Field(default=0.0, alias="promotionalDiscount")
    contractual_discount: float = Field(default=0.0, alias="contractualDiscount")
    non_standard_discount: float = Field(default=0.0, alias="nonStandardDiscount")
    pre_pay_discount: float = Field(default=0.0, alias="prePayDiscount")
    effective_discount: float = Field(default=0.0, alias="effectiveDiscount")
    import_currency: str = Field(default="", alias="importCurrency")
    iso8601_service_duration: str = Field(default="", alias="iso8601ServiceDuration")
    service_duration_months: float = Field(default=0.0, alias="serviceDurationMonths")
    iso8601_lead_time: str = Field(default="", alias="iso8601LeadTime")
    lead_time_days: float = Field(default=0.0, alias="leadTimeDays")
    product_type_classification: str = Field(
        default="", alias="productTypeClassification"
    )
    service_level_name: str = Field(default="", alias="serviceLevelName")
    service_type: str = Field(default="", alias="serviceType")
    parent_line_number: Optional[str] = Field(default=None, alias="parentLineNumber")

    # UserArea extensions
    magic_key: Optional[str] = Field(default=None, alias="magicKey")
    requested_start_date: Optional[str] = Field(default=None, alias="requestedStartDate")
    initial_term: Optional[int] = Field(default=None, alias="initialTerm")
    auto_renewal_term: Optional[int] = Field(default=None, alias="autoRenewalTerm")
    billing_model: Optional[str] = Field(default=None, alias="billingModel")
    charge_type: Optional[str] = Field(default=None, alias="chargeType")
    unit_of_measurement: Optional[str] = Field(default=None, alias="unitOfMeasurement")
    additional_item_info: Optional[str] = Field(default=None, alias="additionalItemInfo")
    pricing_term: Optional[int] = Field(default=None, alias="pricingTerm")
    remaining_term: Optional[float] = Field(default=None, alias="remainingTerm")
    subscription_reference_id: Optional[str] = Field(
        default=None, alias="subscriptionReferenceID"
    )

    @field_validator("service_duration_months", "lead_time_days", mode="before")
    @classmethod
    def _null_duration_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_serializer("service_duration_months", "lead_time_days")
    def _serialize_duration(self, value: float) -> Optional[float]:
        if math.isinf(value) or math.isnan(value):
            raise ValueError(f"unsupported duration value: {value:.2f}")
        if value == 0:
            return None
        return value

    @model_serializer(mode="wrap")
    def _omit_unset_extensions(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        for name in _OMIT_WHEN_UNSET:
            if getattr(self, name) is None:
                data.pop(name, None)
                data.pop(LineItem.model_fields[name].alias, None)
        return data


class AcquireQuoteResponse(BaseModel):
    """Flattened view of a quote returned by the AcquireQuote service."""

    model_config = _MODEL_CONFIG

    quote_name: str = Field(default="", alias="quoteName")
    quote_owner: str = Field(default="", alias="quoteOwner")
    quote_status: str = Field(default="", alias="quoteStatus")
    price_list: str = Field(default="", alias="priceList")
    price_list_id: str = Field(default="", alias="priceListId")
    deal_id: str = Field(default="", alias="dealId")
    customer: Company = Field(default_factory=Company, alias="customer")
    partner: Company = Field(default_factory=Company, alias="partner")
    line_items: List[LineItem] = Field(default_factory=list, alias="items")
