import pytest

from capnz.core.settings import Settings


WIND_ALERT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<alert xmlns="urn:oasis:names:tc:emergency:cap:1.2">
  <identifier>2.49.0.1.554.0.2025.10.21.0001</identifier>
  <sender>emergency@metservice.com</sender>
  <sent>2025-10-21T09:00:00+13:00</sent>
  <status>Actual</status>
  <msgType>Alert</msgType>
  <scope>Public</scope>
  <info>
    <language>en-NZ</language>
    <category>Met</category>
    <event>strongWind</event>
    <responseType>Prepare</responseType>
    <urgency>Expected</urgency>
    <severity>Moderate</severity>
    <certainty>Likely</certainty>
    <onset>2025-10-21T12:00:00+13:00</onset>
    <expires>2025-10-22T00:00:00+13:00</expires>
    <senderName>MetService</senderName>
    <headline>Strong Wind Watch for Wellington</headline>
    <description>Northwest winds may approach severe gale in exposed places.</description>
    <instruction>Secure loose objects.</instruction>
    <web>https://www.metservice.com/warnings/home</web>
    <parameter>
      <valueName>ColourCode</valueName>
      <value>Orange</value>
    </parameter>
    <area>
      <areaDesc>Wellington</areaDesc>
      <circle>-41.29,174.78 25</circle>
    </area>
  </info>
</alert>
"""

RAIN_ALERT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<alert xmlns="urn:oasis:names:tc:emergency:cap:1.2">
  <identifier>2.49.0.1.554.0.2025.10.21.0002</identifier>
  <sender>emergency@metservice.com</sender>
  <sent>2025-10-21T10:00:00+13:00</sent>
  <status>Actual</status>
  <msgType>Alert</msgType>
  <scope>Public</scope>
  <info>
    <category>Met</category>
    <event>rainfall</event>
    <urgency>Future</urgency>
    <severity>Severe</severity>
    <certainty>Likely</certainty>
    <senderName>MetService</senderName>
    <headline>Heavy Rain Warning - Orange</headline>
    <description>Expect 120 to 160 mm of rain.</description>
    <parameter>
      <valueName>ColourCodeHex</valueName>
      <value>#FF8918</value>
    </parameter>
    <area>
      <areaDesc>Tasman west of Motueka</areaDesc>
      <polygon>-41,172 -41,173 -42,173 -41,172</polygon>
    </area>
  </info>
</alert>
"""

BAD_POLYGON_XML = RAIN_ALERT_XML.replace(
    "2.49.0.1.554.0.2025.10.21.0002", "2.49.0.1.554.0.2025.10.21.0003"
).replace("-41,172 -41,173 -42,173 -41,172", "-41,172 -41,173")


@pytest.fixture
def wind_alert_xml() -> str:
    return WIND_ALERT_XML


@pytest.fixture
def rain_alert_xml() -> str:
    return RAIN_ALERT_XML


@pytest.fixture
def bad_polygon_xml() -> str:
    return BAD_POLYGON_XML


@pytest.fixture
def config(tmp_path) -> Settings:
    return Settings(
        RSS_URL="https://alerts.metservice.com/cap/rss",
        FEED_RETRIES=0,
        FEED_RETRY_BASE_S=0,
        SUBMIT_PATH=str(tmp_path / "out" / "capnz.geojson"),
    )
