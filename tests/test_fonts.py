from pathlib import Path

import pytest

from html2pdf.errors import ValidationError
from html2pdf.fonts import FontRegistration, parse_font_spec, parse_font_specs


def test_parse_font_spec_basic() -> None:
    font = parse_font_spec("Open Sans,700,fonts/OpenSans-Bold.ttf")
    assert font == FontRegistration(family="Open Sans", weight=700, source=Path("fonts/OpenSans-Bold.ttf"))
    assert font.style == "normal"


@pytest.mark.parametrize("weight", [1, 100, 400, 950])
def test_parse_font_spec_keeps_weight(weight: int) -> None:
    assert parse_font_spec(f"Serif,{weight},serif.ttf").weight == weight


@pytest.mark.parametrize(
    "spec",
    ["Arial,400", "Arial", "Arial,400,a.ttf,extra", "", "Arial,400,", ",400,a.ttf"],
)
def test_parse_font_spec_rejects_wrong_field_count(spec: str) -> None:
    with pytest.raises(ValidationError) as exc:
        parse_font_spec(spec)
    assert f"Invalid font specification: {spec}" in str(exc.value)
    assert exc.value.code == "INVALID_FONT_SPEC"


@pytest.mark.parametrize("weight", ["bold", "4.5", "", "0", "-100"])
def test_parse_font_spec_rejects_bad_weight(weight: str) -> None:
    spec = f"Arial,{weight},arial.ttf"
    with pytest.raises(ValidationError) as exc:
        parse_font_spec(spec)
    assert spec in str(exc.value)


def test_parse_font_specs_keeps_order() -> None:
    fonts = parse_font_specs(["A,400,a.ttf", "B,700,b.ttf"])
    assert [font.family for font in fonts] == ["A", "B"]


def test_parse_font_specs_stops_at_first_invalid() -> None:
    with pytest.raises(ValidationError) as exc:
        parse_font_specs(["A,400,a.ttf", "B,700", "C,x,c.ttf"])
    assert "B,700" in str(exc.value)
