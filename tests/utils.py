# tests/utils.py
"""
Single source of truth for test feeds, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from pathlib import Path
from xml.sax.saxutils import escape

from lxml import etree

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_UNIQUE_ID = "ABCD1234"
DEFAULT_AGENT_ID = "XNWXNW"
DEFAULT_MOD_TIME = "2009-01-01-12:30:00"
DEFAULT_HEADLINE = "SHOW STOPPER!!!"
DEFAULT_DESCRIPTION = "Don't pass up an opportunity like this!"

BAD_CHARACTER = chr(0x16)

# -----------------------------
# Listing segment bodies
# -----------------------------

_AGENTS = """
  <listingAgent id="1">
    <name>Mr. John Doe</name>
    <telephone type="BH">05 1234 5678</telephone>
    <telephone type="mobile">1234 5678</telephone>
    <email>jdoe@somedomain.com.au</email>
  </listingAgent>
  <listingAgent id="2">
    <name>Mrs. Jane Doe</name>
    <email>jane@somedomain.com.au</email>
  </listingAgent>
  <listingAgent id="3"></listingAgent>"""

_ADDRESS = """
  <address display="yes">
    <subNumber>2</subNumber>
    <streetNumber>39</streetNumber>
    <street>Main Road</street>
    <suburb display="yes">RICHMOND</suburb>
    <state>vic</state>
    <postcode>3121</postcode>
    <country>AUS</country>
  </address>"""

_FEATURES = """
  <features>
    <bedrooms>4</bedrooms>
    <bathrooms>2</bathrooms>
    <ensuite>yes</ensuite>
    <garages>2</garages>
    <carports>2</carports>
    <airConditioning>1</airConditioning>
    <pool>yes</pool>
    <alarmSystem>0</alarmSystem>
  </features>"""

_LAND_DETAILS = """
  <landDetails>
    <area unit="squareMeter">80</area>
    <frontage unit="meter">20</frontage>
    <depth unit="meter" side="rear">40</depth>
    <depth unit="meter" side="left">60</depth>
    <crossOver value="left"/>
  </landDetails>"""

_BUILDING_DETAILS = """
  <buildingDetails>
    <area unit="square">40</area>
    <energyRating>4.5</energyRating>
  </buildingDetails>"""

_MEDIA = """
  <images>
    <img id="m" modTime="2009-01-01-12:30:00" url="http://www.realestate.com.au/tmp/imageM.jpg" format="jpg"/>
    <img id="a" modTime="2009-01-01-12:30:00" url="http://www.realestate.com.au/tmp/imageA.jpg" format="jpg"/>
    <img id="b"/>
  </images>
  <objects>
    <floorplan id="1" modTime="2009-01-01-12:30:00" url="http://www.realestate.com.au/tmp/floorplan1.gif" format="gif"/>
  </objects>"""

_SOLD_DETAILS = """
  <soldDetails>
    <soldPrice display="no">580000</soldPrice>
    <soldDate>2009-01-10-12:30:00</soldDate>
  </soldDetails>"""

_PAYLOADS = {
    "residential": """
  <category name="House"/>
  <price display="yes">500000</price>
  <priceView>Between $400,000 and $600,000</priceView>
  <auction date="2009-02-04-18:30"/>""",
    "rental": """
  <category name="House"/>
  <rent period="week" display="yes">350</rent>
  <bond>1400</bond>
  <dateAvailable>2009-01-26-12:30:00</dateAvailable>""",
    "land": """
  <landCategory name="Residential"/>
  <price display="yes">80000</price>
  <priceView>Offers over $75,000</priceView>
  <estate>
    <name>Panorama</name>
    <stage>5</stage>
  </estate>""",
    "rural": """
  <ruralCategory name="Cropping"/>
  <price display="yes">400000</price>""",
}

# -----------------------------
# Feed factories
# -----------------------------


def xml_encode(text: str) -> str:
    """Escape free text the way a feed producer would put it inside an element."""
    return escape(text)


def listing_xml(
    tag: str = "residential",
    status: str | None = "current",
    unique_id: str | None = DEFAULT_UNIQUE_ID,
    *,
    headline: str = DEFAULT_HEADLINE,
    description: str = DEFAULT_DESCRIPTION,
    mod_time: str = DEFAULT_MOD_TIME,
    extra: str = "",
) -> str:
    """
    Build one listing segment with a realistic body.

    `headline`/`description` are XML-encoded here, so pass the text as a
    human would type it (including any HTML). `status=None` / `unique_id=None`
    omit the attribute/element entirely. `extra` is appended verbatim.
    """
    status_attr = f' status="{status}"' if status is not None else ""
    unique = f"\n  <uniqueID>{unique_id}</uniqueID>" if unique_id is not None else ""
    sold = _SOLD_DETAILS if status == "sold" and tag != "rental" else ""
    return (
        f'<{tag} modTime="{mod_time}"{status_attr}>'
        f"\n  <agentID>{DEFAULT_AGENT_ID}</agentID>{unique}"
        f"{_AGENTS}{_ADDRESS}"
        f"\n  <headline>{xml_encode(headline)}</headline>"
        f"\n  <description>{xml_encode(description)}</description>"
        f"{_PAYLOADS[tag]}{_FEATURES}{_LAND_DETAILS}{_BUILDING_DETAILS}{_MEDIA}{sold}{extra}"
        f"\n</{tag}>"
    )


def property_list(*segments: str, declaration: bool = True) -> str:
    head = '<?xml version="1.0" encoding="utf-8"?>\n' if declaration else ""
    body = "\n".join(segments)
    return f'{head}<propertyList date="2009-01-01-12:30:00" username="XNWXNW" password="74fg48">\n{body}\n</propertyList>\n'


def element(xml: str) -> etree._Element:
    return etree.fromstring(xml)


# -----------------------------
# Canonical documents
# -----------------------------

ALL_TYPES_IDS = [
    "Residential-Current-ABCD1234",
    "Residential-Sold-ABCD1234",
    "Residential-Withdrawn-ABCD1234",
    "Rental-Current-ABCD1234",
    "Rental-Leased-ABCD1234",
    "Rental-Withdrawn-ABCD1234",
]


def all_types_feed() -> str:
    return property_list(
        listing_xml("residential", "current"),
        listing_xml("residential", "sold"),
        listing_xml("residential", "withdrawn"),
        listing_xml("rental", "current"),
        listing_xml("rental", "leased"),
        listing_xml("rental", "withdrawn"),
    )


def mixed_content_feed() -> str:
    return property_list(
        '<pewPew1 colour="red">\n  <pew>one</pew>\n</pewPew1>',
        listing_xml("residential", "current"),
        '<pewPew2 count="2"/>',
        listing_xml("rental", "current"),
        "<!-- comments are neither listings nor fragments -->",
        "<pewPew3>three</pewPew3>",
    )


def invalid_character_feed() -> str:
    return property_list(listing_xml("residential", "current", description=f"Lovely{BAD_CHARACTER} home"))


def bad_content_feed() -> str:
    return '<?xml version="1.0" encoding="utf-8"?>\n<badContent>\n  <residential status="current"/>\n</badContent>\n'


def write_feed(tmp_dir: Path, xml: str, filename: str = "feed.xml", *, bom: bool = False) -> Path:
    tmp_dir.mkdir(parents=True, exist_ok=True)
    path = tmp_dir / filename
    path.write_text(xml, encoding="utf-8-sig" if bom else "utf-8")
    return path
