# tests/test_naming.py
from __future__ import annotations

from talent_sdk.utils.naming import convert_keys_snake_to_pascal, snake_to_pascal


def test_snake_to_pascal_basic() -> None:
    assert snake_to_pascal("index_ids_to_search_into") == "IndexIdsToSearchInto"
    assert snake_to_pascal("transaction_id") == "TransactionId"
    assert snake_to_pascal("take") == "Take"


def test_snake_to_pascal_drops_leading_and_trailing_underscores() -> None:
    assert snake_to_pascal("_resume_data") == "ResumeData"
    assert snake_to_pascal("resume_data_") == "ResumeData"
    assert snake_to_pascal("___") == "___"  # only underscores


def test_snake_to_pascal_keeps_already_pascal_names() -> None:
    assert snake_to_pascal("ResumeData") == "ResumeData"
    assert snake_to_pascal("IPAddress") == "IPAddress"


def test_convert_keys_snake_to_pascal_converts_nested_dict_and_list_keys() -> None:
    inp = {
        "index_ids_to_search_into": ["a", "b"],
        "filter_criteria": {"search_expression": "python", "document_ids": ["1"]},
        "pagination_settings": [{"skip": 0, "take": 10}],
    }

    out = convert_keys_snake_to_pascal(inp)

    assert out["IndexIdsToSearchInto"] == ["a", "b"]
    assert out["FilterCriteria"]["SearchExpression"] == "python"
    assert out["FilterCriteria"]["DocumentIds"] == ["1"]
    assert out["PaginationSettings"][0]["Take"] == 10


def test_convert_keys_snake_to_pascal_leaves_primitives_intact() -> None:
    assert convert_keys_snake_to_pascal("x_y") == "x_y"
    assert convert_keys_snake_to_pascal(123) == 123
    assert convert_keys_snake_to_pascal(None) is None
    assert convert_keys_snake_to_pascal(True) is True


def test_convert_keys_snake_to_pascal_does_not_mutate_input() -> None:
    inp = {"index_id": "x"}
    convert_keys_snake_to_pascal(inp)
    assert inp == {"index_id": "x"}


def test_default_preserved_containers_keep_inner_keys() -> None:
    """
    ResumeData / JobData / CustomInfo:
      - the container key itself is converted
      - inner keys are sent verbatim
    """
    inp = {
        "resume_data": {"contact_information": {"candidate_name": "x"}},
        "custom_info": {"my_key": 1},
        "normal_block": {"inner_key_one": 1},
    }

    out = convert_keys_snake_to_pascal(inp)

    assert out["ResumeData"] == {"contact_information": {"candidate_name": "x"}}
    assert out["CustomInfo"] == {"my_key": 1}
    assert out["NormalBlock"]["InnerKeyOne"] == 1


def test_explicit_preserve_container_keys_accepts_snake_or_pascal_name() -> None:
    inp = {"raw_block": {"keep_me": 1}, "other_block": {"convert_me": 2}}

    out_snake = convert_keys_snake_to_pascal(inp, preserve_container_keys=["raw_block"])
    out_pascal = convert_keys_snake_to_pascal(inp, preserve_container_keys=["RawBlock"])

    assert out_snake["RawBlock"] == {"keep_me": 1}
    assert out_pascal["RawBlock"] == {"keep_me": 1}
    assert out_snake["OtherBlock"] == {"ConvertMe": 2}


def test_empty_preserve_set_converts_everything() -> None:
    out = convert_keys_snake_to_pascal({"resume_data": {"inner_key": 1}}, preserve_container_keys=[])
    assert out == {"ResumeData": {"InnerKey": 1}}
