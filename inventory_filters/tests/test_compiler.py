"""Tests for compiling filter criteria into ORM predicates.

Every test builds a small inventory with the stub models and checks which
objects the compiled predicate selects.
"""

from datetime import date

from ddt import data, ddt, unpack
from django.db.models import Q
from django.test import TestCase

from inventory_filters.constants import resources
from inventory_filters.constants.enums import AttributeContentType, AttributeKind, KeyType, KeyUsage
from inventory_filters.engine.compiler import PredicateCompiler, compile_filters
from inventory_filters.tests.stubs.models import (
    CertificateLocation,
    CryptographicKey,
    CryptographicKeyItem,
    Discovery,
    EntityInstance,
    KeyItemUsage,
    Location,
    OwnerAssociation,
    RaProfile,
    TokenInstance,
    TokenProfile,
)
from inventory_filters.tests.test_utils import criterion, make_certificate, set_attribute, uuids


class CompilerTestCase(TestCase):
    """Base class selecting certificates with compiled criteria."""

    resource = resources.CERTIFICATE

    def select(self, *criteria) -> set:
        return uuids(compile_filters(self.resource, list(criteria)).queryset())

    def ids(self, *objects) -> set:
        return {obj.uuid for obj in objects}


class TestScenarios(CompilerTestCase):
    """Reference scenarios over direct, attribute and to-many fields."""

    def test_number_field_with_absent_value(self):
        """Test a NUMBER field where one object has no value.

        Expected result:
            - GREATER_OR_EQUAL(1) selects O1 and O2
            - EMPTY selects O3
            - NOT_EQUALS(1) selects O2 and O3
        """
        o1 = make_certificate("o1", key_size=1)
        o2 = make_certificate("o2", key_size=2)
        o3 = make_certificate("o3")

        self.assertEqual(self.select(criterion("KEY_SIZE", "GREATER_OR_EQUAL", 1)), self.ids(o1, o2))
        self.assertEqual(self.select(criterion("KEY_SIZE", "EMPTY")), self.ids(o3))
        self.assertEqual(self.select(criterion("KEY_SIZE", "NOT_EQUALS", 1)), self.ids(o2, o3))

    def test_custom_string_attribute(self):
        """Test a CUSTOM string attribute set on two of three objects.

        Expected result:
            - CONTAINS("r") selects the red object
            - NOT_EMPTY selects both objects carrying the attribute
        """
        o1 = make_certificate("o1")
        o2 = make_certificate("o2")
        make_certificate("o3")
        set_attribute(o1, "color", value="red")
        set_attribute(o2, "color", value="blue")

        self.assertEqual(self.select(criterion("color|STRING", "CONTAINS", "r", source="CUSTOM")), self.ids(o1))
        self.assertEqual(self.select(criterion("color|STRING", "NOT_EMPTY", source="CUSTOM")), self.ids(o1, o2))

    def test_many_to_many_groups(self):
        """Test group membership through a many-to-many relation.

        Expected result:
            - EQUALS("A") selects O1 and O2
            - NOT_EQUALS("A") selects only O3, which has no groups
        """
        o1 = make_certificate("o1", groups=("A", "B"))
        o2 = make_certificate("o2", groups=("A",))
        o3 = make_certificate("o3")

        self.assertEqual(self.select(criterion("GROUP_NAME", "EQUALS", "A")), self.ids(o1, o2))
        self.assertEqual(self.select(criterion("GROUP_NAME", "NOT_EQUALS", "A")), self.ids(o3))


@ddt
class TestAbsentValues(CompilerTestCase):
    """Objects lacking a value on the criterion's path."""

    def setUp(self):
        super().setUp()
        profile = RaProfile.objects.create(name="profile")
        self.present = make_certificate(
            "present",
            groups=("A",),
            key_size=2048,
            not_after=date(2030, 1, 1),
            trusted_ca=True,
            ra_profile=profile,
        )
        set_attribute(self.present, "retries", AttributeContentType.INTEGER, 3)
        self.absent = make_certificate(None)

    @data(
        criterion("COMMON_NAME", "EQUALS", "present"),
        criterion("KEY_SIZE", "GREATER", 0),
        criterion("NOT_AFTER", "LESSER", "2099-01-01"),
        criterion("TRUSTED_CA", "EQUALS", True),
        criterion("RA_PROFILE_NAME", "EQUALS", "profile"),
        criterion("GROUP_NAME", "EQUALS", "A"),
        criterion("retries|INTEGER", "GREATER_OR_EQUAL", 0, source="CUSTOM"),
    )
    def test_positive_operators_skip_absent(self, positive):
        """Test that EQUALS and ordering operators never match a missing value.

        Expected result:
            - Only the object with a value is selected
        """
        self.assertEqual(self.select(positive), self.ids(self.present))

    @data(
        criterion("COMMON_NAME", "NOT_EQUALS", "other"),
        criterion("COMMON_NAME", "NOT_CONTAINS", "zzz"),
        criterion("KEY_SIZE", "NOT_EQUALS", 1),
        criterion("TRUSTED_CA", "NOT_EQUALS", False),
        criterion("RA_PROFILE_NAME", "NOT_EQUALS", "other"),
        criterion("GROUP_NAME", "NOT_EQUALS", "B"),
        criterion("retries|INTEGER", "NOT_EQUALS", 7, source="CUSTOM"),
    )
    def test_negative_operators_include_absent(self, negative):
        """Test that NOT_EQUALS and NOT_CONTAINS hold for a missing value.

        Expected result:
            - Both objects are selected
        """
        self.assertEqual(self.select(negative), self.ids(self.present, self.absent))

    @data(
        ("COMMON_NAME", "PROPERTY"),
        ("KEY_SIZE", "PROPERTY"),
        ("NOT_AFTER", "PROPERTY"),
        ("TRUSTED_CA", "PROPERTY"),
        ("RA_PROFILE_NAME", "PROPERTY"),
        ("GROUP_NAME", "PROPERTY"),
        ("CERT_LOCATION_NAME", "PROPERTY"),
        ("retries|INTEGER", "CUSTOM"),
        ("missing|STRING", "METADATA"),
    )
    @unpack
    def test_empty_and_not_empty_are_complements(self, field_id, source):
        """Test that EMPTY and NOT_EMPTY split the objects in two.

        Expected result:
            - The selections do not overlap and together cover every object
        """
        empty = self.select(criterion(field_id, "EMPTY", source=source))
        not_empty = self.select(criterion(field_id, "NOT_EMPTY", source=source))

        self.assertFalse(empty & not_empty)
        self.assertEqual(empty | not_empty, self.ids(self.present, self.absent))


@ddt
class TestMultipleValues(CompilerTestCase):
    """List values for EQUALS and NOT_EQUALS."""

    def setUp(self):
        super().setUp()
        self.o1 = make_certificate("alpha", groups=("A",), key_size=1024)
        self.o2 = make_certificate("beta", groups=("B",), key_size=2048)
        self.o3 = make_certificate("gamma", groups=("A", "C"), key_size=4096)
        self.o4 = make_certificate(None)
        for obj, color in ((self.o1, "red"), (self.o2, "blue"), (self.o3, "green")):
            set_attribute(obj, "color", value=color)

    @data(
        ("COMMON_NAME", ["alpha", "beta"], "PROPERTY"),
        ("KEY_SIZE", [1024, 4096], "PROPERTY"),
        ("GROUP_NAME", ["B", "C"], "PROPERTY"),
        ("color|STRING", ["red", "green"], "CUSTOM"),
    )
    @unpack
    def test_list_equals_is_union(self, field_id, values, source):
        """Test that EQUALS over a list selects objects matching any value.

        Expected result:
            - EQUALS(v1, v2) selects the union of EQUALS(v1) and EQUALS(v2)
        """
        combined = self.select(criterion(field_id, "EQUALS", values, source=source))
        separate = [self.select(criterion(field_id, "EQUALS", value, source=source)) for value in values]

        self.assertEqual(combined, separate[0] | separate[1])
        self.assertTrue(combined)

    @data(
        ("COMMON_NAME", ["alpha", "beta"], "PROPERTY"),
        ("KEY_SIZE", [1024, 4096], "PROPERTY"),
        ("GROUP_NAME", ["B", "C"], "PROPERTY"),
        ("color|STRING", ["red", "green"], "CUSTOM"),
    )
    @unpack
    def test_list_not_equals_is_intersection(self, field_id, values, source):
        """Test that NOT_EQUALS over a list excludes objects matching any value.

        Expected result:
            - NOT_EQUALS(v1, v2) selects the intersection of NOT_EQUALS(v1) and NOT_EQUALS(v2)
        """
        combined = self.select(criterion(field_id, "NOT_EQUALS", values, source=source))
        separate = [self.select(criterion(field_id, "NOT_EQUALS", value, source=source)) for value in values]

        self.assertEqual(combined, separate[0] & separate[1])
        self.assertIn(self.o4.uuid, combined)

    def test_many_to_many_list_uses_one_relation(self):
        """Test that list values on a to-many field match any single related row.

        Expected result:
            - An object is selected when one of its groups equals one of the values
        """
        selected = self.select(criterion("GROUP_NAME", "EQUALS", ["A", "B"]))

        self.assertEqual(selected, self.ids(self.o1, self.o2, self.o3))


class TestCriteriaCombination(CompilerTestCase):
    """Combining several criteria."""

    def test_criteria_are_anded_in_any_order(self):
        """Test that criteria order does not change the selection.

        Expected result:
            - Both orders select the objects matching every criterion
        """
        o1 = make_certificate("web-1", groups=("A",), key_size=2048)
        make_certificate("web-2", groups=("B",), key_size=2048)
        make_certificate("db-1", groups=("A",), key_size=2048)
        set_attribute(o1, "env", value="prod")
        criteria = [
            criterion("env|STRING", "EQUALS", "prod", source="CUSTOM"),
            criterion("GROUP_NAME", "EQUALS", "A"),
            criterion("COMMON_NAME", "STARTS_WITH", "web"),
            criterion("KEY_SIZE", "GREATER_OR_EQUAL", 2048),
        ]

        forward = self.select(*criteria)
        backward = self.select(*reversed(criteria))

        self.assertEqual(forward, self.ids(o1))
        self.assertEqual(backward, forward)

    def test_no_criteria_selects_everything(self):
        """Test compiling an empty criteria list.

        Expected result:
            - The condition is empty and every object is selected
        """
        o1 = make_certificate("o1")
        o2 = make_certificate("o2")

        predicate = compile_filters(self.resource, [])

        self.assertEqual(predicate.condition, Q())
        self.assertEqual(uuids(predicate.queryset()), self.ids(o1, o2))

    def test_queryset_narrows_base(self):
        """Test applying a predicate to an existing queryset.

        Expected result:
            - Only objects of the base queryset are selected
        """
        o1 = make_certificate("o1", key_size=1)
        make_certificate("o2", key_size=1)
        predicate = compile_filters(self.resource, [criterion("KEY_SIZE", "EQUALS", 1)])

        base = predicate.model.objects.filter(common_name="o1")

        self.assertEqual(uuids(predicate.queryset(base)), self.ids(o1))


class TestStringComparisons(CompilerTestCase):
    """Substring operators and case sensitivity."""

    def setUp(self):
        super().setUp()
        self.o1 = make_certificate("www.Example.com")
        self.o2 = make_certificate("api.example.org")
        self.o3 = make_certificate(None)

    def test_substring_operators(self):
        """Test CONTAINS, NOT_CONTAINS, STARTS_WITH and ENDS_WITH.

        Expected result:
            - Matches are case-sensitive by default
            - NOT_CONTAINS includes objects without a value
        """
        self.assertEqual(self.select(criterion("COMMON_NAME", "CONTAINS", "Example")), self.ids(self.o1))
        self.assertEqual(self.select(criterion("COMMON_NAME", "STARTS_WITH", "api.")), self.ids(self.o2))
        self.assertEqual(self.select(criterion("COMMON_NAME", "ENDS_WITH", ".com")), self.ids(self.o1))
        self.assertEqual(
            self.select(criterion("COMMON_NAME", "NOT_CONTAINS", "Example")), self.ids(self.o2, self.o3)
        )

    def test_case_insensitive_lookups(self):
        """Test that a case-insensitive compiler uses the i* lookups.

        Expected result:
            - STRING comparisons use iexact and istartswith
        """
        compiler = PredicateCompiler(self.resource, case_sensitive=False)

        equals = compiler.compile([criterion("COMMON_NAME", "EQUALS", "x")])
        starts = compiler.compile([criterion("COMMON_NAME", "STARTS_WITH", "x")])

        self.assertIn("common_name__iexact", str(equals.condition))
        self.assertIn("common_name__istartswith", str(starts.condition))

    def test_like_wildcards_are_literal(self):
        """Test that LIKE wildcards in values are matched literally.

        Expected result:
            - '%' and '_' only match themselves
        """
        o4 = make_certificate("100%_sure")

        self.assertEqual(self.select(criterion("COMMON_NAME", "CONTAINS", "%_")), self.ids(o4))
        self.assertEqual(self.select(criterion("COMMON_NAME", "STARTS_WITH", "_")), set())


class TestEnumFields(CompilerTestCase):
    """ENUM fields and codes that name no member."""

    def setUp(self):
        super().setUp()
        self.issued = make_certificate("issued", state="issued")
        self.revoked = make_certificate("revoked", state="revoked")

    def test_unknown_code_matches_nothing(self):
        """Test EQUALS with a code that names no member.

        Expected result:
            - No object is selected
        """
        self.assertEqual(self.select(criterion("CERTIFICATE_STATE", "EQUALS", "lost")), set())

    def test_unknown_code_not_equals_matches_everything(self):
        """Test NOT_EQUALS with a code that names no member.

        Expected result:
            - Every object is selected
        """
        selected = self.select(criterion("CERTIFICATE_STATE", "NOT_EQUALS", "lost"))

        self.assertEqual(selected, self.ids(self.issued, self.revoked))

    def test_unknown_code_in_list_is_skipped(self):
        """Test a list mixing known and unknown codes.

        Expected result:
            - Objects matching the known codes are selected
        """
        selected = self.select(criterion("CERTIFICATE_STATE", "EQUALS", ["revoked", "lost"]))

        self.assertEqual(selected, self.ids(self.revoked))

    def test_unknown_codes_with_other_criteria(self):
        """Test an unknown code combined with other criteria.

        Expected result:
            - The whole AND selects nothing
        """
        selected = self.select(
            criterion("COMMON_NAME", "EQUALS", "issued"),
            criterion("CERTIFICATE_STATE", "EQUALS", ["lost", "gone"]),
        )

        self.assertEqual(selected, set())


@ddt
class TestExistenceOverride(CompilerTestCase):
    """BOOLEAN fields meaning "a related row with a given value exists"."""

    def setUp(self):
        super().setUp()
        private_key = CryptographicKey.objects.create(name="pair")
        CryptographicKeyItem.objects.create(key=private_key, name="pub", type=KeyType.PUBLIC_KEY)
        CryptographicKeyItem.objects.create(key=private_key, name="priv", type=KeyType.PRIVATE_KEY)
        public_key = CryptographicKey.objects.create(name="public")
        CryptographicKeyItem.objects.create(key=public_key, name="pub", type=KeyType.PUBLIC_KEY)

        self.with_private = make_certificate("with-private", key=private_key)
        self.public_only = make_certificate("public-only", key=public_key)
        self.no_key = make_certificate("no-key")

    @data(
        ("EQUALS", True, "with_private"),
        ("NOT_EQUALS", False, "with_private"),
        ("EQUALS", "false", "without_private"),
        ("NOT_EQUALS", "true", "without_private"),
        ("EQUALS", [True, False], "everything"),
        ("NOT_EQUALS", [True, False], "nothing"),
    )
    @unpack
    def test_private_key(self, condition, value, expected):
        """Test the PRIVATE_KEY field.

        Expected result:
            - EQUALS(true) and NOT_EQUALS(false) select certificates whose key has a private item
            - The converse selects the others, including certificates without a key
        """
        expected_ids = {
            "with_private": self.ids(self.with_private),
            "without_private": self.ids(self.public_only, self.no_key),
            "everything": self.ids(self.with_private, self.public_only, self.no_key),
            "nothing": set(),
        }[expected]

        self.assertEqual(self.select(criterion("PRIVATE_KEY", condition, value)), expected_ids)


class TestJoinedFields(CompilerTestCase):
    """Fields reached through to-one and multi-hop relations."""

    def test_to_one_relation(self):
        """Test a field on a to-one relation.

        Expected result:
            - NOT_EQUALS includes certificates without the related object
        """
        o1 = make_certificate("o1", ra_profile=RaProfile.objects.create(name="issuing"))
        o2 = make_certificate("o2", ra_profile=RaProfile.objects.create(name="internal"))
        o3 = make_certificate("o3")

        self.assertEqual(self.select(criterion("RA_PROFILE_NAME", "EQUALS", "issuing")), self.ids(o1))
        self.assertEqual(self.select(criterion("RA_PROFILE_NAME", "NOT_EQUALS", "issuing")), self.ids(o2, o3))
        self.assertEqual(self.select(criterion("RA_PROFILE_NAME", "EMPTY")), self.ids(o3))

    def test_two_hop_to_many_relation(self):
        """Test a field two relations away through a to-many link.

        Expected result:
            - Certificates are selected when any of their locations matches
            - Certificates without locations satisfy NOT_EQUALS and EMPTY
        """
        o1 = make_certificate("o1")
        o2 = make_certificate("o2")
        o3 = make_certificate("o3")
        primary = Location.objects.create(name="primary")
        backup = Location.objects.create(name="backup")
        CertificateLocation.objects.create(certificate=o1, location=primary)
        CertificateLocation.objects.create(certificate=o1, location=backup)
        CertificateLocation.objects.create(certificate=o2, location=backup)

        self.assertEqual(self.select(criterion("CERT_LOCATION_NAME", "EQUALS", "backup")), self.ids(o1, o2))
        self.assertEqual(self.select(criterion("CERT_LOCATION_NAME", "NOT_EQUALS", "primary")), self.ids(o2, o3))
        self.assertEqual(self.select(criterion("CERT_LOCATION_NAME", "EMPTY")), self.ids(o3))

    def test_attribute_values_are_per_row(self):
        """Test an object storing several values of the same attribute.

        Expected result:
            - EQUALS matches when any stored value matches
            - NOT_EQUALS excludes the object when any stored value matches
        """
        o1 = make_certificate("o1")
        o2 = make_certificate("o2")
        set_attribute(o1, "team", value="red")
        set_attribute(o1, "team", value="blue")
        set_attribute(o2, "team", value="blue")

        self.assertEqual(self.select(criterion("team|STRING", "EQUALS", "red", source="CUSTOM")), self.ids(o1))
        self.assertEqual(self.select(criterion("team|STRING", "NOT_EQUALS", "red", source="CUSTOM")), self.ids(o2))

    def test_attribute_kind_and_content_type_are_matched(self):
        """Test that attributes are told apart by kind and content type.

        Expected result:
            - A metadata criterion ignores custom values of the same name
            - A criterion on one content type ignores values stored with another
        """
        o1 = make_certificate("o1")
        o2 = make_certificate("o2")
        set_attribute(o1, "owner", value="ops", kind=AttributeKind.METADATA)
        set_attribute(o2, "owner", value="ops", kind=AttributeKind.CUSTOM)
        set_attribute(o2, "level", AttributeContentType.INTEGER, 5)
        set_attribute(o1, "level", AttributeContentType.TEXT, "5")

        self.assertEqual(self.select(criterion("owner|STRING", "EQUALS", "ops", source="METADATA")), self.ids(o1))
        self.assertEqual(self.select(criterion("level|INTEGER", "NOT_EMPTY", source="CUSTOM")), self.ids(o2))
        self.assertEqual(self.select(criterion("level|TEXT", "EQUALS", "5", source="CUSTOM")), self.ids(o1))


class TestKeyItems(CompilerTestCase):
    """Key listings, rooted at key items whose attributes belong to their key."""

    resource = resources.CRYPTOGRAPHIC_KEY

    def setUp(self):
        super().setUp()
        hsm = TokenProfile.objects.create(name="hsm")
        self.key1 = CryptographicKey.objects.create(name="k1", token_profile=hsm)
        self.key2 = CryptographicKey.objects.create(name="k2")
        self.item1 = CryptographicKeyItem.objects.create(key=self.key1, name="k1-pub", type=KeyType.PUBLIC_KEY, length=2048)
        self.item2 = CryptographicKeyItem.objects.create(key=self.key1, name="k1-priv", type=KeyType.PRIVATE_KEY, length=2048)
        self.item3 = CryptographicKeyItem.objects.create(key=self.key2, name="k2-secret", type=KeyType.SECRET_KEY)

    def test_item_fields(self):
        """Test fields of the key item itself.

        Expected result:
            - Item type and length are compared per item
        """
        self.assertEqual(self.select(criterion("CKI_TYPE", "EQUALS", "Private")), self.ids(self.item2))
        self.assertEqual(self.select(criterion("CKI_LENGTH", "EMPTY")), self.ids(self.item3))

    def test_key_fields(self):
        """Test fields of the key reached through the item.

        Expected result:
            - Every item of a matching key is selected
        """
        self.assertEqual(self.select(criterion("CK_TOKEN_PROFILE", "EQUALS", "hsm")), self.ids(self.item1, self.item2))
        self.assertEqual(self.select(criterion("CK_TOKEN_PROFILE", "NOT_EQUALS", "hsm")), self.ids(self.item3))

    def test_key_attributes(self):
        """Test attributes stored against the key, not the item.

        Expected result:
            - Items inherit the attributes of their key
        """
        set_attribute(self.key2, "usage", value="backup", resource=resources.CRYPTOGRAPHIC_KEY)

        selected = self.select(criterion("usage|STRING", "EQUALS", "backup", source="CUSTOM"))

        self.assertEqual(selected, self.ids(self.item3))

    def test_item_usages(self):
        """Test the usages of an item, stored one row per usage.

        Expected result:
            - EQUALS selects items having the usage
            - NOT_EQUALS selects items without it, including items with no usage
            - EMPTY selects items with no usage
        """
        KeyItemUsage.objects.create(item=self.item1, usage=KeyUsage.VERIFY)
        KeyItemUsage.objects.create(item=self.item2, usage=KeyUsage.SIGN)
        KeyItemUsage.objects.create(item=self.item2, usage=KeyUsage.DECRYPT)

        self.assertEqual(self.select(criterion("CKI_USAGE", "EQUALS", ["sign", "verify"])), self.ids(self.item1, self.item2))
        self.assertEqual(self.select(criterion("CKI_USAGE", "NOT_EQUALS", "sign")), self.ids(self.item1, self.item3))
        self.assertEqual(self.select(criterion("CKI_USAGE", "EMPTY")), self.ids(self.item3))

    def test_key_token_instance_and_owner(self):
        """Test the token instance and owner of the key reached through the item.

        Expected result:
            - Items of a key without a token instance or owner match EMPTY
        """
        self.key1.token_instance = TokenInstance.objects.create(name="softhsm")
        self.key1.owner = OwnerAssociation.objects.create(owner_username="alice")
        self.key1.save()

        self.assertEqual(self.select(criterion("CK_TOKEN_INSTANCE", "EQUALS", "softhsm")), self.ids(self.item1, self.item2))
        self.assertEqual(self.select(criterion("CK_OWNER", "EMPTY")), self.ids(self.item3))
        self.assertEqual(self.select(criterion("CK_OWNER", "NOT_EQUALS", "alice")), self.ids(self.item3))


class TestCompiledSql(CompilerTestCase):
    """The SQL produced for compiled predicates."""

    def test_values_are_parameters(self):
        """Test that values are passed as query parameters.

        Expected result:
            - The value does not appear in the SQL text but in its parameters
        """
        value = "x'; DROP TABLE stubs_certificate; --"
        predicate = compile_filters(
            self.resource,
            [criterion("COMMON_NAME", "EQUALS", value), criterion("note|STRING", "CONTAINS", value, source="CUSTOM")],
        )

        sql, params = predicate.as_sql()

        self.assertNotIn("DROP TABLE", sql)
        self.assertIn(value, params)

    def test_fragments_are_ordered_by_cost(self):
        """Test that plain column comparisons come before subqueries.

        Expected result:
            - The first condition of the AND is the plain column comparison
        """
        predicate = compile_filters(
            self.resource,
            [
                criterion("note|STRING", "EQUALS", "x", source="CUSTOM"),
                criterion("GROUP_NAME", "EQUALS", "A"),
                criterion("COMMON_NAME", "EQUALS", "x"),
            ],
        )

        self.assertEqual(predicate.condition.children[0], ("common_name__exact", "x"))


@ddt
class TestIntegerColumns(CompilerTestCase):
    """Equality of numbers with integer columns."""

    def setUp(self):
        super().setUp()
        self.o1 = make_certificate("o1", key_size=1)
        self.o2 = make_certificate("o2", key_size=2)
        self.o3 = make_certificate("o3")

    @data(1.5, "1.5", [1.5], [1.5, 2.5])
    def test_fraction_equals_no_integer(self, value):
        """Test EQUALS with values an integer column can never hold.

        Expected result:
            - No object is selected, the value is not truncated to 1
        """
        self.assertEqual(self.select(criterion("KEY_SIZE", "EQUALS", value)), set())

    def test_fraction_is_never_equal(self):
        """Test NOT_EQUALS with a value an integer column can never hold.

        Expected result:
            - Every object is selected, including the one without a value
        """
        selected = self.select(criterion("KEY_SIZE", "NOT_EQUALS", 1.5))

        self.assertEqual(selected, self.ids(self.o1, self.o2, self.o3))

    def test_fractions_among_other_values(self):
        """Test a list mixing fractional and integral values.

        Expected result:
            - Only the integral values take part in the comparison
        """
        self.assertEqual(self.select(criterion("KEY_SIZE", "EQUALS", [1.5, 2])), self.ids(self.o2))
        self.assertEqual(self.select(criterion("KEY_SIZE", "NOT_EQUALS", [1.5, 2])), self.ids(self.o1, self.o3))

    def test_integral_float(self):
        """Test EQUALS with a float holding an integer.

        Expected result:
            - The float compares equal to the integer
        """
        self.assertEqual(self.select(criterion("KEY_SIZE", "EQUALS", 1.0)), self.ids(self.o1))

    def test_ordering_with_fraction(self):
        """Test ordering comparisons with a fractional bound.

        Expected result:
            - The bound is compared as a number
        """
        self.assertEqual(self.select(criterion("KEY_SIZE", "GREATER_OR_EQUAL", 1.5)), self.ids(self.o2))
        self.assertEqual(self.select(criterion("KEY_SIZE", "LESSER", 1.5)), self.ids(self.o1))

    def test_related_integer_column(self):
        """Test a fractional value on an integer column of another resource.

        Expected result:
            - Discoveries are not matched by a truncated value
        """
        Discovery.objects.create(name="scan", total_certificates_discovered=3)

        predicate = compile_filters(resources.DISCOVERY, [criterion("DISCOVERY_TOTAL_CERT_DISCOVERED", "EQUALS", 3.5)])

        self.assertFalse(predicate.queryset().exists())


class TestCertificateOwner(CompilerTestCase):
    """The owner of a certificate, reached through a to-one relation."""

    def test_owner(self):
        """Test owner comparisons.

        Expected result:
            - EQUALS selects the owned certificate
            - NOT_EQUALS and EMPTY also select the certificate without an owner
        """
        o1 = make_certificate("o1", owner=OwnerAssociation.objects.create(owner_username="owner1"))
        o2 = make_certificate("o2", owner=OwnerAssociation.objects.create(owner_username="owner2"))
        o3 = make_certificate("o3")

        self.assertEqual(self.select(criterion("OWNER", "EQUALS", ["owner1", "owner2"])), self.ids(o1, o2))
        self.assertEqual(self.select(criterion("OWNER", "NOT_EQUALS", "owner1")), self.ids(o2, o3))
        self.assertEqual(self.select(criterion("OWNER", "EMPTY")), self.ids(o3))

    def test_validation_results(self):
        """Test the per-check validation results of a certificate.

        Expected result:
            - Each check is compared independently
        """
        o1 = make_certificate("o1", ocsp_validation="valid", crl_validation="revoked")
        o2 = make_certificate("o2", ocsp_validation="valid")

        self.assertEqual(self.select(criterion("OCSP_VALIDATION", "EQUALS", "valid")), self.ids(o1, o2))
        self.assertEqual(self.select(criterion("CRL_VALIDATION", "NOT_EQUALS", "revoked")), self.ids(o2))


class TestOtherResources(TestCase):
    """Fields of entities, locations and discoveries."""

    def test_entity_fields(self):
        """Test entity name and kind.

        Expected result:
            - Entities are filtered by their own columns
        """
        EntityInstance.objects.create(name="ejbca", connector_name="EJBCA connector", kind="ejbca")
        keystore = EntityInstance.objects.create(name="keystore", kind="keystore")

        predicate = compile_filters(
            resources.ENTITY,
            [criterion("ENTITY_KIND", "EQUALS", "keystore"), criterion("ENTITY_CONNECTOR_NAME", "EMPTY")],
        )

        self.assertEqual(uuids(predicate.queryset()), {keystore.uuid})

    def test_location_fields(self):
        """Test location flags and entity instance names.

        Expected result:
            - Flags compare as booleans
        """
        multiple = Location.objects.create(name="a", entity_instance_name="ejbca", support_multiple_entries=True)
        Location.objects.create(name="b", entity_instance_name="ejbca")

        predicate = compile_filters(
            resources.LOCATION,
            [
                criterion("LOCATION_ENTITY_INSTANCE", "EQUALS", "ejbca"),
                criterion("LOCATION_SUPPORT_MULTIPLE_ENTRIES", "EQUALS", "true"),
            ],
        )

        self.assertEqual(uuids(predicate.queryset()), {multiple.uuid})

    def test_discovery_fields(self):
        """Test discovery connector names and kinds.

        Expected result:
            - Discoveries without a kind match NOT_EQUALS
        """
        network = Discovery.objects.create(name="net", connector_name="Network", kind="IP")
        manual = Discovery.objects.create(name="manual", connector_name="Network")

        predicate = compile_filters(
            resources.DISCOVERY,
            [criterion("DISCOVERY_CONNECTOR_NAME", "STARTS_WITH", "Net"), criterion("DISCOVERY_KIND", "NOT_EQUALS", "IP")],
        )

        self.assertEqual(uuids(predicate.queryset()), {manual.uuid})
        self.assertNotIn(network.uuid, uuids(predicate.queryset()))
