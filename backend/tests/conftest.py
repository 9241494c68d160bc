import copy
import json

import pytest
import requests

from cad_converter.core.database import DatabaseManager
from cad_converter.core.storage import StorageManager
from cad_converter.services.cad_service import CadServiceClient
from cad_converter.services.pipeline_manager import ConversionOrchestrator

PUBLIC_BASE = "https://project.supabase.co/storage/v1/object/public"


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the postgrest builder: select/update + eq + execute."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.filters = []
        self.update_data = None

    def select(self, columns="*"):
        return self

    def update(self, data):
        self.update_data = data
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        if self.db.fail_tables.get(self.table):
            raise RuntimeError(self.db.fail_tables[self.table])

        rows = self.db.tables.setdefault(self.table, [])
        matched = [row for row in rows if self._matches(row)]
        if self.update_data is not None:
            self.db.updates.append((self.table, dict(self.filters), dict(self.update_data)))
            for row in matched:
                row.update(self.update_data)
        return FakeResponse([copy.deepcopy(row) for row in matched])


class FakeBucket:
    def __init__(self, storage, name):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.storage.fail_upload:
            raise RuntimeError("bucket unavailable")
        self.storage.uploads.append((self.name, path, file, file_options))
        self.storage.objects[(self.name, path)] = file
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path):
        if self.storage.fail_public_url:
            raise RuntimeError("public URL lookup failed")
        self.storage.url_lookups.append((self.name, path))
        return f"{PUBLIC_BASE}/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects = {}
        self.uploads = []
        self.url_lookups = []
        self.fail_upload = False
        self.fail_public_url = False

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeSupabase:
    def __init__(self):
        self.tables = {"cad_conversions": [], "gemstone_specs": [], "metal_specs": []}
        self.updates = []
        self.fail_tables = {}
        self.storage = FakeStorage()

    def table(self, name):
        return FakeQuery(self, name)

    def conversion(self, conversion_id):
        for row in self.tables["cad_conversions"]:
            if row["id"] == conversion_id:
                return row
        return None


class FakeHttpResponse:
    """Streamed response: the body is served from `chunks` by iter_content."""

    def __init__(self, status_code=200, payload=None, text=None, chunks=None):
        self.status_code = status_code
        self.encoding = "utf-8"
        if chunks is not None:
            self.chunks = chunks
        elif payload is not None:
            self.chunks = [json.dumps(payload).encode("utf-8")]
        else:
            self.chunks = [(text or "").encode("utf-8")]
        self.closed = False

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def iter_content(self, chunk_size=1):
        for chunk in self.chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk

    def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeHttpResponse(200, CAD_FILES)
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None, stream=False):
        self.calls.append({
            "url": url, "json": json, "headers": headers, "timeout": timeout, "stream": stream,
        })
        if self.error is not None:
            raise self.error
        return self.response


CAD_FILES = {
    "step_file": "ISO-10303-21;\nEND-ISO-10303-21;",
    "stl_file": "solid design\nendsolid design",
    "obj_file": "o design\nv 0 0 0",
}


@pytest.fixture
def supabase():
    client = FakeSupabase()
    client.tables["cad_conversions"].append({
        "id": "abc123",
        "status": "pending",
        "current_step": 2,
        "vectorized_svg_url": "https://x/vec.svg",
    })
    client.tables["metal_specs"].append({
        "conversion_id": "abc123",
        "color": "yellow",
        "karat": 18,
        "gold_weight": "5.2",
        "tone": "warm",
    })
    return client


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def orchestrator(supabase, session):
    return ConversionOrchestrator(
        database=DatabaseManager(supabase),
        storage=StorageManager(supabase, bucket="cad-files"),
        cad_client=CadServiceClient("https://cad.example.com", timeout=300, session=session),
    )


@pytest.fixture
def timeout_error():
    return requests.exceptions.Timeout("read timed out")
