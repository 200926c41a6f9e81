import pytest

from app.core.validation import validate_contact_form


def make_form(**overrides):
    form = {
        "name": "李四",
        "contact": "13912345678",
        "message": "请提供空运到洛杉矶的报价。",
    }
    form.update(overrides)
    return form


class TestValidForms:

    def test_minimal_form_passes(self):
        data, errors = validate_contact_form(make_form())

        assert errors == []
        assert data.name == "李四"
        assert data.company == ""
        assert data.service_type == ""

    def test_strings_are_trimmed(self):
        data, errors = validate_contact_form(
            make_form(
                name="  Alice Wang  ",
                contact=" a@b.com ",
                company=" ACME ",
                destination="  鹿特丹 ",
                message="   需要仓储服务和清关代理。   ",
            )
        )

        assert errors == []
        assert data.name == "Alice Wang"
        assert data.contact == "a@b.com"
        assert data.company == "ACME"
        assert data.destination == "鹿特丹"
        assert data.message == "需要仓储服务和清关代理。"

    def test_hyphenated_field_names_are_accepted(self):
        data, errors = validate_contact_form(
            make_form(**{"service-type": "清关", "cargo-type": "机械设备"})
        )

        assert errors == []
        assert data.service_type == "清关"
        assert data.cargo_type == "机械设备"

    def test_blank_service_type_counts_as_absent(self):
        data, errors = validate_contact_form(make_form(**{"service-type": "  "}))

        assert errors == []
        assert data.service_type == ""

    def test_result_is_deterministic(self):
        form = make_form(name="X", contact="bad")

        assert validate_contact_form(form) == validate_contact_form(form)


class TestContactRule:

    @pytest.mark.parametrize("contact", ["a@b.com", "13912345678", "19800000000"])
    def test_accepted(self, contact):
        _, errors = validate_contact_form(make_form(contact=contact))
        assert errors == []

    @pytest.mark.parametrize(
        "contact",
        ["12345", "23912345678", "12912345678", "139123456789", "a@b", "a b@c.com", ""],
    )
    def test_rejected(self, contact):
        _, errors = validate_contact_form(make_form(contact=contact))
        assert errors == ["请输入有效的邮箱地址或手机号码"]


class TestNameRule:

    def test_digits_in_name_rejected(self):
        _, errors = validate_contact_form(make_form(name="Bob123"))
        assert errors == ["姓名只能包含中文、英文和空格"]

    @pytest.mark.parametrize("name", ["A", "", "x" * 51])
    def test_length_out_of_range(self, name):
        _, errors = validate_contact_form(make_form(name=name))
        assert errors == ["姓名必须在2-50个字符之间"]

    def test_missing_name(self):
        form = make_form()
        del form["name"]

        _, errors = validate_contact_form(form)

        assert errors == ["姓名必须在2-50个字符之间"]


class TestMessageRule:

    @pytest.mark.parametrize("length", [10, 2000])
    def test_bounds_accepted(self, length):
        _, errors = validate_contact_form(make_form(message="货" * length))
        assert errors == []

    @pytest.mark.parametrize("length", [9, 2001])
    def test_bounds_rejected(self, length):
        _, errors = validate_contact_form(make_form(message="货" * length))
        assert errors == ["需求描述必须在10-2000个字符之间"]

    def test_padding_does_not_count(self):
        _, errors = validate_contact_form(make_form(message="   " + "货" * 9 + "   "))
        assert errors == ["需求描述必须在10-2000个字符之间"]


class TestOptionalFields:

    @pytest.mark.parametrize(
        "field, message",
        [
            ("company", "公司名称不能超过100个字符"),
            ("cargo-type", "货物类型不能超过100个字符"),
            ("destination", "目的地不能超过100个字符"),
        ],
    )
    def test_too_long(self, field, message):
        _, errors = validate_contact_form(make_form(**{field: "x" * 101}))
        assert errors == [message]

    @pytest.mark.parametrize("field", ["company", "cargo-type", "destination"])
    def test_at_limit(self, field):
        _, errors = validate_contact_form(make_form(**{field: "x" * 100}))
        assert errors == []

    def test_unknown_service_type(self):
        _, errors = validate_contact_form(make_form(**{"service-type": "快递"}))
        assert errors == ["请选择有效的服务类型"]


def test_every_violation_is_reported_in_field_order():
    data, errors = validate_contact_form(
        {
            "message": "短",
            "service-type": "快递",
            "contact": "12345",
            "name": "Bob123",
        }
    )

    assert data is None
    assert errors == [
        "姓名只能包含中文、英文和空格",
        "请输入有效的邮箱地址或手机号码",
        "请选择有效的服务类型",
        "需求描述必须在10-2000个字符之间",
    ]


@pytest.mark.parametrize("name", ["张\n三", "张\r\n三", "张 \t  三"])
def test_inner_whitespace_in_name_is_collapsed(name):
    data, errors = validate_contact_form(make_form(name=name))

    assert errors == []
    assert data.name == "张 三"
