import pytest

from remote_support.adapters.channels.teams.element_renderer import (
    render,
    render_column_pair,
    render_fields,
)
from remote_support.adapters.channels.teams.elements import ColumnPair, Input, TextBlock
from remote_support.adapters.channels.teams.localization import StringTable
from remote_support.core.tickets.models import AnnotatedField, ChoiceOption, FieldDescriptor, FieldType
from remote_support.utils.errors import UnsupportedFieldTypeError


LOCALIZE = StringTable(
    {
        "CategoryTypeText": "Category",
        "HardwareCategoryText": "Hardware (devices)",
        "DescriptionText": "Description",
        "FirstObservedText": "First observed on",
        "DeviceNameText": "Device name",
        "RequiredFieldValidationText": "Required",
        "DateValidationText": "Bad date",
    },
    culture="en-US",
)


def _annotated(descriptor: FieldDescriptor, value: str = "", failed: bool = False) -> AnnotatedField:
    return AnnotatedField(field=descriptor, value=value, validation_failed=failed)


def test_text_field_renders_single_line_input() -> None:
    descriptor = FieldDescriptor(id="deviceName", label_key="DeviceNameText", type=FieldType.text)

    elements = render(_annotated(descriptor, "LT-1"), LOCALIZE)

    assert elements == (
        Input(id="deviceName", input_type="text", label="Device name", value="LT-1", is_required=False),
    )


def test_multiline_and_date_fields_map_to_their_inputs() -> None:
    multiline = FieldDescriptor(
        id="description", label_key="DescriptionText", type=FieldType.multiline_text, required=True
    )
    occurred = FieldDescriptor(id="issueOccurredOn", label_key="FirstObservedText", type=FieldType.date)

    (description,) = render(_annotated(multiline), LOCALIZE)
    (date_input,) = render(_annotated(occurred, "2024-01-01"), LOCALIZE)

    assert description.input_type == "multiline"
    assert description.is_required is True
    assert date_input.input_type == "date"
    assert date_input.value == "2024-01-01"


def test_choice_field_localizes_titles_but_keeps_values() -> None:
    descriptor = FieldDescriptor(
        id="category",
        label_key="CategoryTypeText",
        type=FieldType.choice,
        required=True,
        choices=(ChoiceOption(value="Hardware", label_key="HardwareCategoryText"),),
    )

    (element,) = render(_annotated(descriptor, "Hardware"), LOCALIZE)

    assert element.input_type == "choice"
    assert element.label == "Category"
    assert element.choices[0].title == "Hardware (devices)"
    assert element.choices[0].value == "Hardware"


def test_failed_field_gets_marker_right_after_input() -> None:
    descriptor = FieldDescriptor(id="description", label_key="DescriptionText", type=FieldType.multiline_text)

    primary, marker = render(_annotated(descriptor, failed=True), LOCALIZE)

    assert isinstance(primary, Input)
    assert marker == TextBlock(
        id="descriptionValidation", text="Required", color="attention", wrap=True, spacing="none"
    )


def test_failed_date_field_uses_date_message() -> None:
    descriptor = FieldDescriptor(id="issueOccurredOn", label_key="FirstObservedText", type=FieldType.date)

    _, marker = render(_annotated(descriptor, "2999-01-01", failed=True), LOCALIZE)

    assert marker.text == "Bad date"
    assert marker.id == "issueOccurredOnValidation"


def test_render_fields_flattens_in_order() -> None:
    fields = [
        _annotated(FieldDescriptor(id="a", label_key="DeviceNameText", type=FieldType.text), failed=True),
        _annotated(FieldDescriptor(id="b", label_key="DeviceNameText", type=FieldType.text)),
    ]

    elements = render_fields(fields, LOCALIZE)

    assert [getattr(item, "id", None) for item in elements] == ["a", "aValidation", "b"]


def test_unknown_field_type_raises() -> None:
    descriptor = FieldDescriptor.model_construct(id="sig", label_key="SigText", type="Signature", required=False)

    with pytest.raises(UnsupportedFieldTypeError) as exc_info:
        render(_annotated(descriptor), LOCALIZE)

    assert exc_info.value.details["field_id"] == "sig"


def test_column_pair_keeps_empty_value_cell() -> None:
    assert render_column_pair("Category", None) == ColumnPair(label="Category", value="")
    assert render_column_pair("Category", "Hardware").value == "Hardware"
