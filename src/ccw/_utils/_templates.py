import uuid
from datetime import datetime, timezone
from string import Template
from typing import Optional
from xml.sax.saxutils import escape

ACQUIRE_QUOTE_REQUEST = Template(
    """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
  <soapenv:Header/>
  <soapenv:Body>
    <AcquireQuote xmlns="http://www.openapplications.org/oagis/10" releaseID="2014" versionID="1.0" systemEnvironmentCode="Production" languageCode="en-US">
      <ApplicationArea>
        <CreationDateTime>${creation_date_time}</CreationDateTime>
        <BODID>${bod_id}</BODID>
      </ApplicationArea>
      <DataArea>
        <Acquire/>
        <Quote>
          <QuoteHeader>
            <ID typeCode="DealID">${deal_id}</ID>
          </QuoteHeader>
        </Quote>
      </DataArea>
    </AcquireQuote>
  </soapenv:Body>
</soapenv:Envelope>
"""
)


def render_acquire_quote_request(
    deal_id: str,
    *,
    bod_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Render the AcquireQuote request body for a deal id."""
    now = now or datetime.now(timezone.utc)
    return ACQUIRE_QUOTE_REQUEST.substitute(
        deal_id=escape(deal_id),
        bod_id=escape(bod_id or str(uuid.uuid4())),
        creation_date_time=now.strftime("%Y-%m-%dT%H:%M:%SZ"),
    )
