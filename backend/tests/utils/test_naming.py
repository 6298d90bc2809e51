# tests/utils/test_naming.py
import pytest

from constructiq.utils.naming import camel_keys, natural_key, snake_keys, to_camel, to_snake

@pytest.mark.parametrize("snake, camel", [
    ("job_number", "jobNumber"),
    ("project_id", "projectId"),
    ("warranty_start_date", "warrantyStartDate"),
    ("zip", "zip"),
])
def test_case_translation(snake, camel):
    assert to_camel(snake) == camel
    assert to_snake(camel) == snake
    # Already translated names pass through
    assert to_camel(camel) == camel
    assert to_snake(snake) == snake

def test_key_translation():
    assert snake_keys({"fileData": 1, "mimeType": 2}) == {"file_data": 1, "mime_type": 2}
    assert camel_keys({"rfi_manager": 1, "id": 2}) == {"rfiManager": 1, "id": 2}

def test_natural_key_orders_digit_runs_numerically():
    numbers = ["10", "2.10", "03 30 00", "2.9", "2.1", "03 20 00"]
    assert sorted(numbers, key=natural_key) == ["2.1", "2.9", "2.10", "03 20 00", "03 30 00", "10"]
