"""Projection of an AcquireQuote response document onto the quote model.

Only the response status check and XML decoding are hard failures. Optional
numeric values that are missing or malformed degrade to zero, since partial
quote data is more useful to reporting callers than no data at all; each
degradation is logged at DEBUG level.
"""

import math
import re
from logging import getLogger
from typing import Callable, Optional

from .._utils._duration import parse_duration_days, parse_duration_months
from .._utils._xml import XmlNode
from .._utils.constants import LOGGER_NAME
from ..models.errors import MalformedDurationError, UpstreamRejectedError
from ..models.quotes import AcquireQuoteResponse, Address, Company, Contact, LineItem

logger = getLogger(LOGGER_NAME)

SUCCESS_REASON = "Success"

ROLE_QUOTE_OWNER = "QuoteOwner"
ROLE_END_CUSTOMER = "End Customer"
ROLE_PARTNER = "Partner"

DESCRIPTION_SERVICE_TYPE = "ServiceType"
DESCRIPTION_SERVICE_LEVEL_NAME = "ServiceLevelName"

DISCOUNT_FIELDS = {
    "TotalDiscount": "total_discount",
    "StandardDiscount": "standard_discount",
    "PromotionalDiscount": "promotional_discount",
    "ContractualDiscount": "contractual_discount",
    "NonStandardDiscount": "non_standard_discount",
    "PrePay": "pre_pay_discount",
    "EffectiveDiscount": "effective_discount",
}

PRICE_PROPERTIES = {
    "UnitNetPrice": "unit_net_price",
    "UnitNetPriceBeforeCredits": "unit_net_price_before_credits",
    "OriginalUnitListPrice": "original_unit_list_price",
}

CISCO_LINE_STRINGS = {
    "SubscriptionReferenceID": "subscription_reference_id",
    "MagicKey": "magic_key",
    "RequestedStartDate": "requested_start_date",
    "BillingModel": "billing_model",
    "ChargeType": "charge_type",
    "UnitOfMeasurement": "unit_of_measurement",
    "AdditionalItemInfo": "additional_item_info",
}

CISCO_LINE_INTEGERS = {
    "InitialTerm": "initial_term",
    "AutoRenewalTerm": "auto_renewal_term",
    "PricingTerm": "pricing_term",
}

# ASCII only: int() and float() also take Unicode digits, "_" separators and NaN/inf.
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_float(text: str, field: str) -> float:
    if not text:
        return 0.0
    if _DECIMAL.fullmatch(text) is None:
        logger.debug(f"Could not parse {field}={text!r} as a number, using 0")
        return 0.0
    value = float(text)
    if not math.isfinite(value):
        logger.debug(f"{field}={text!r} is out of range, using 0")
        return 0.0
    return value


def parse_int(text: str, field: str) -> int:
    if not text:
        return 0
    if _INTEGER.fullmatch(text) is None:
        logger.debug(f"Could not parse {field}={text!r} as an integer, using 0")
        return 0
    return int(text)


def _duration(text: str, parse: Callable[[str], float], field: str) -> float:
    try:
        return parse(text)
    except MalformedDurationError:
        logger.debug(f"Could not parse {field}={text!r} as a duration, using 0")
        return 0.0


def project_acquire_quote(root: XmlNode) -> AcquireQuoteResponse:
    """Build an :class:`AcquireQuoteResponse` from a response envelope.

    Args:
        root: The ``Envelope`` element of the response.

    Returns:
        AcquireQuoteResponse: The flattened quote.

    Raises:
        UpstreamRejectedError: If the response reports anything but success.
    """
    show_quote = root.find("Body", "ShowQuote")
    data_area = show_quote.child("DataArea")

    change_status = data_area.find("Show", "ResponseCriteria", "ChangeStatus")
    reason = change_status.find_text("Reason")
    if reason != SUCCESS_REASON:
        raise UpstreamRejectedError(reason, change_status.chardata)

    quote = data_area.child("Quote")
    response = _project_header(quote.child("QuoteHeader"))
    response.line_items = [
        _project_line(line) for line in quote.children("QuoteLine")
    ]
    return response


def _project_header(header: XmlNode) -> AcquireQuoteResponse:
    response = AcquireQuoteResponse()

    value_text = header.find("Extension", "ValueText")
    if value_text.attr("typeCode") == "QuoteName":
        response.quote_name = value_text.text

    response.quote_status = header.find_text("Status", "Code")

    for party in header.children("Party"):
        role = party.attr("role")
        if role == ROLE_QUOTE_OWNER:
            response.quote_owner = party.find_text("Contact", "ID")
        elif role == ROLE_END_CUSTOMER:
            response.customer = _project_company(party, name=party.find_text("Name"))
        elif role == ROLE_PARTNER:
            response.partner = _project_company(
                party, name=party.find_text("PartyIDs", "ID")
            )

    qualification = header.child("QualificationTerm")
    qualification_id = qualification.child("ID")
    if (
        qualification.attr("typeAttribute") == "Deal"
        and qualification_id.attr("schemeAgencyName") == "Cisco"
    ):
        response.deal_id = qualification_id.text

    price_lists = header.find("UserArea", "CiscoExtensions", "CiscoHeader")
    for price_list in price_lists.children("PriceList"):
        description = price_list.find_text("Description")
        price_list_id = price_list.find_text("ID")
        if description and price_list_id:
            response.price_list = description
            response.price_list_id = price_list_id
            break

    return response


def _project_company(party: XmlNode, name: str) -> Company:
    address = party.find("Location", "Address")
    contact = party.child("Contact")

    company = Company(
        name=name,
        location=Address(
            line_one=address.find_text("LineOne"),
            line_two=address.find_text("LineTwo"),
            line_three=address.find_text("LineThree"),
            city_name=address.find_text("CityName"),
            country_sub_division_code=address.find_text("CountrySubDivisionCode"),
            country_code=address.find_text("CountryCode"),
            postal_code=address.find_text("PostalCode"),
        ),
        contact=Contact(
            job_title=contact.find_text("JobTitle"),
            telephone=contact.find_text("TelephoneCommunication", "FormattedNumber"),
            email=contact.find_text("EMailAddressCommunication", "EMailAddressID"),
        ),
    )

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    for name_part in contact.children("Name"):
        sequence_name = name_part.attr("sequenceName")
        if sequence_name == "First Name" and first_name is None:
            first_name = name_part.text
        elif sequence_name == "Last Name" and last_name is None:
            last_name = name_part.text
    company.contact.first_name = first_name or ""
    company.contact.last_name = last_name or ""

    contact_id = contact.child("ID")
    if contact_id.attr("schemeName") == "Website":
        company.contact.website = contact_id.text

    return company


def _project_line(line: XmlNode) -> LineItem:
    item = line.child("Item")
    line_item = LineItem(
        line_number=line.find_text("LineNumber"),
        part_number=item.find_text("ItemID", "ID"),
    )

    description: Optional[str] = None
    for entry in item.children("Description"):
        entry_type = entry.attr("type")
        if entry_type == DESCRIPTION_SERVICE_TYPE:
            line_item.service_type = entry.text
        elif entry_type == DESCRIPTION_SERVICE_LEVEL_NAME:
            line_item.service_level_name = entry.text
        elif entry.text and description is None:
            description = entry.text
    line_item.description = description or ""

    classification = item.find("Classification", "Type")
    if classification.attr("listName") == "ProductType":
        line_item.product_type_classification = classification.text

    for prop in item.find("Specification").children("Property"):
        _apply_property(line_item, prop)

    for discount in line.find("PaymentTerm").children("Discount"):
        field = DISCOUNT_FIELDS.get(discount.find_text("Type"))
        if field is not None:
            setattr(
                line_item,
                field,
                parse_float(discount.find_text("DiscountPercent"), field),
            )

    amount = line.find("UnitPrice", "Amount")
    line_item.import_currency = amount.attr("currencyID")
    line_item.unit_price = parse_float(amount.text, "unit_price")
    line_item.quantity = parse_int(line.find_text("Quantity"), "quantity")
    line_item.extended_amount = parse_float(
        line.find_text("ExtendedAmount"), "extended_amount"
    )
    line_item.total_amount = parse_float(line.find_text("TotalAmount"), "total_amount")

    _apply_cisco_line(line_item, line.find("UserArea", "CiscoExtensions", "CiscoLine"))
    return line_item


def _apply_property(line_item: LineItem, prop: XmlNode) -> None:
    parent_id = prop.child("ParentID")
    if parent_id and parent_id.text not in ("", "0"):
        line_item.parent_line_number = parent_id.text

    name_value = prop.child("NameValue")
    name = name_value.attr("name")
    if name == "CCWLineNumber":
        line_item.ccw_line_number = name_value.text
    elif name in PRICE_PROPERTIES:
        field = PRICE_PROPERTIES[name]
        setattr(line_item, field, parse_float(name_value.text, field))
    elif name == "BundleIndicator":
        for effectivity in prop.children("Effectivity"):
            effectivity_type = effectivity.find_text("Type")
            duration = effectivity.find_text("EffectiveTimePeriod", "Duration")
            if effectivity_type == "ServiceDuration":
                line_item.iso8601_service_duration = duration
                line_item.service_duration_months = _duration(
                    duration, parse_duration_months, "service_duration_months"
                )
            elif effectivity_type == "LeadTime":
                line_item.iso8601_lead_time = duration
                line_item.lead_time_days = _duration(
                    duration, parse_duration_days, "lead_time_days"
                )


def _apply_cisco_line(line_item: LineItem, cisco_line: XmlNode) -> None:
    for element, field in CISCO_LINE_STRINGS.items():
        value = cisco_line.find_text(element)
        setattr(line_item, field, value or None)

    for element, field in CISCO_LINE_INTEGERS.items():
        value = parse_int(cisco_line.find_text(element), field)
        setattr(line_item, field, value or None)

    remaining_term = parse_float(cisco_line.find_text("RemainingTerm"), "remaining_term")
    line_item.remaining_term = remaining_term or None
