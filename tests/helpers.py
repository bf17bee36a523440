"""
Shared test helpers for the WaveTech test suite.

In-memory stand-ins for the gate's collaborators plus a canned HTTP
transport so validation never leaves the process.
"""

import httpx
from sqlalchemy.exc import OperationalError

from modules.gate.fingerprint import DeviceFingerprint
from modules.gate.secure_store import SecretNotFoundError, UnexpectedStatusError

VERIFY_KEY = "GJDFHDFHFDJGSDAGKGHK"
ACCESS_KEY = "Bs2675kDjkb5Ga"
ENDPOINT = "https://gate.test/server.php"
TRUSTED_URL = "https://content.example.com/home"


class MemorySecureStore:
    """Dict-backed SecureStore."""

    def __init__(self, entries=None):
        self.entries = dict(entries or {})

    def save(self, key, value):
        self.entries[key] = value

    def load(self, key):
        if key not in self.entries:
            raise SecretNotFoundError(key)
        return self.entries[key]


class BrokenSecureStore:
    """Every operation fails like a locked or corrupt credential store."""

    def save(self, key, value):
        raise UnexpectedStatusError(-25308)

    def load(self, key):
        raise UnexpectedStatusError(-25308)


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


def fixed_fingerprint(region="US"):
    return lambda: DeviceFingerprint(
        region_code=region,
        language_code="en",
        system_info="Linux 6.8.0",
        model_identifier="x86_64",
    )


def scripted_transport(*outcomes):
    """MockTransport answering each request with the next outcome.

    An outcome is a response body (str), an int status code, or an exception
    instance to raise. The last outcome repeats once the script runs out.
    Returns (transport, requests) where requests collects every httpx.Request.
    """
    requests = []

    def handler(request):
        requests.append(request)
        outcome = outcomes[min(len(requests), len(outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome, text="")
        return httpx.Response(200, text=outcome)

    return httpx.MockTransport(handler), requests


def approved_body(token=VERIFY_KEY, url=TRUSTED_URL):
    return f"{token}#{url}"


def database_locked(*args, **kwargs):
    """Stand-in for a preference read/write on a locked SQLite file."""
    raise OperationalError("SELECT value FROM preferences", {}, Exception("database is locked"))


# Complete add-form payloads, as the shell's text fields submit them
VALID_PART = dict(
    part_number="PT-002", name="Magnetron", category="Replacement",
    manufacturer="HeatWave", model_compatibility="HeatMaster Pro",
    description="2M246 magnetron", weight_grams="850", unit_cost="22.5",
    selling_price="39.9", stock_quantity="4", reorder_threshold="5",
    reorder_quantity="10", supplier="ABC Electronics", location_bin="P3",
    warranty_months="12", rating="4", compatible_models="HeatMaster Pro, , Mini ",
)

VALID_MICROWAVE = dict(
    sku="MW-2002", model_name="CompactChef", serial_number="SN999",
    category="Grill", brand="HeatWave", wattage="800", voltage="230",
    capacity_liters="17", color="Black", dimensions="44x34x26 cm",
    weight_kg="10.2", material="Steel", control_type="Dial",
    features="Grill,Defrost", energy_rating="A", warranty_years="1",
    supplier="ABC Electronics", cost_price="80", selling_price="129.99",
    stock_quantity="3", location_bin="A2", country_of_origin="China",
    barcode="MW2002", maintenance_interval_days="365", tags="New Arrival",
)
