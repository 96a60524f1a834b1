"""
Declarative catalog of the intrinsic fields each resource can be filtered by.

The registry is built from ``FIELD_TABLE`` at application start-up. Join paths are
Django relation names from the resource's root model, so ``("key", "items")`` on a
certificate reaches the items of the certificate's key.
"""

from inventory_filters.api.data import FieldDescriptor, ValueType
from inventory_filters.constants import resources
from inventory_filters.constants.enums import (
    CertificateState,
    CertificateValidationStatus,
    ComplianceStatus,
    DiscoveryStatus,
    KeyAlgorithm,
    KeyFormat,
    KeyState,
    KeyType,
    KeyUsage,
)

CERTIFICATE_FIELDS = [
    FieldDescriptor(
        id="COMMON_NAME",
        resource=resources.CERTIFICATE,
        label="Common Name",
        value_type=ValueType.STRING,
        property_name="common_name",
    ),
    FieldDescriptor(
        id="SERIAL_NUMBER",
        resource=resources.CERTIFICATE,
        label="Serial Number",
        value_type=ValueType.STRING,
        property_name="serial_number",
    ),
    FieldDescriptor(
        id="RA_PROFILE_NAME",
        resource=resources.CERTIFICATE,
        label="RA Profile",
        value_type=ValueType.STRING,
        property_name="name",
        join_path=("ra_profile",),
        related_resource=resources.RA_PROFILE,
        settable=True,
    ),
    FieldDescriptor(
        id="CERTIFICATE_STATE",
        resource=resources.CERTIFICATE,
        label="State",
        value_type=ValueType.ENUM,
        property_name="state",
        enum_class=CertificateState,
    ),
    FieldDescriptor(
        id="CERTIFICATE_VALIDATION_STATUS",
        resource=resources.CERTIFICATE,
        label="Validation Status",
        value_type=ValueType.ENUM,
        property_name="validation_status",
        enum_class=CertificateValidationStatus,
    ),
    FieldDescriptor(
        id="COMPLIANCE_STATUS",
        resource=resources.CERTIFICATE,
        label="Compliance Status",
        value_type=ValueType.ENUM,
        property_name="compliance_status",
        enum_class=ComplianceStatus,
    ),
    FieldDescriptor(
        id="GROUP_NAME",
        resource=resources.CERTIFICATE,
        label="Groups",
        value_type=ValueType.STRING,
        property_name="name",
        join_path=("groups",),
        related_resource=resources.GROUP,
        multivalued_relation=True,
        settable=True,
    ),
    FieldDescriptor(
        id="CERT_LOCATION_NAME",
        resource=resources.CERTIFICATE,
        label="Locations",
        value_type=ValueType.STRING,
        property_name="name",
        join_path=("locations", "location"),
        related_resource=resources.LOCATION,
        multivalued_relation=True,
    ),
    FieldDescriptor(
        id="OWNER",
        resource=resources.CERTIFICATE,
        label="Owner",
        value_type=ValueType.STRING,
        property_name="owner_username",
        join_path=("owner",),
        related_resource=resources.USER,
        settable=True,
    ),
    FieldDescriptor(
        id="ISSUER_COMMON_NAME",
        resource=resources.CERTIFICATE,
        label="Issuer Common Name",
        value_type=ValueType.STRING,
        property_name="issuer_common_name",
    ),
    FieldDescriptor(
        id="SIGNATURE_ALGORITHM",
        resource=resources.CERTIFICATE,
        label="Signature Algorithm",
        value_type=ValueType.STRING,
        property_name="signature_algorithm",
    ),
    FieldDescriptor(
        id="FINGERPRINT",
        resource=resources.CERTIFICATE,
        label="Fingerprint",
        value_type=ValueType.STRING,
        property_name="fingerprint",
    ),
    FieldDescriptor(
        id="NOT_AFTER",
        resource=resources.CERTIFICATE,
        label="Expires At",
        value_type=ValueType.DATE,
        property_name="not_after",
    ),
    FieldDescriptor(
        id="NOT_BEFORE",
        resource=resources.CERTIFICATE,
        label="Valid From",
        value_type=ValueType.DATE,
        property_name="not_before",
    ),
    FieldDescriptor(
        id="PUBLIC_KEY_ALGORITHM",
        resource=resources.CERTIFICATE,
        label="Public Key Algorithm",
        value_type=ValueType.STRING,
        property_name="public_key_algorithm",
    ),
    FieldDescriptor(
        id="KEY_SIZE",
        resource=resources.CERTIFICATE,
        label="Key Size",
        value_type=ValueType.NUMBER,
        property_name="key_size",
    ),
    FieldDescriptor(
        id="KEY_USAGE",
        resource=resources.CERTIFICATE,
        label="Key Usage",
        value_type=ValueType.STRING,
        property_name="key_usage",
    ),
    FieldDescriptor(
        id="BASIC_CONSTRAINTS",
        resource=resources.CERTIFICATE,
        label="Basic Constraints",
        value_type=ValueType.STRING,
        property_name="basic_constraints",
    ),
    FieldDescriptor(
        id="SUBJECT_ALTERNATIVE_NAMES",
        resource=resources.CERTIFICATE,
        label="Subject Alternative Name",
        value_type=ValueType.STRING,
        property_name="subject_alternative_names",
    ),
    FieldDescriptor(
        id="SUBJECTDN",
        resource=resources.CERTIFICATE,
        label="Subject DN",
        value_type=ValueType.STRING,
        property_name="subject_dn",
    ),
    FieldDescriptor(
        id="ISSUERDN",
        resource=resources.CERTIFICATE,
        label="Issuer DN",
        value_type=ValueType.STRING,
        property_name="issuer_dn",
    ),
    FieldDescriptor(
        id="ISSUER_SERIAL_NUMBER",
        resource=resources.CERTIFICATE,
        label="Issuer Serial Number",
        value_type=ValueType.STRING,
        property_name="issuer_serial_number",
    ),
    FieldDescriptor(
        id="OCSP_VALIDATION",
        resource=resources.CERTIFICATE,
        label="OCSP Validation",
        value_type=ValueType.ENUM,
        property_name="ocsp_validation",
        enum_class=CertificateValidationStatus,
    ),
    FieldDescriptor(
        id="CRL_VALIDATION",
        resource=resources.CERTIFICATE,
        label="CRL Validation",
        value_type=ValueType.ENUM,
        property_name="crl_validation",
        enum_class=CertificateValidationStatus,
    ),
    FieldDescriptor(
        id="SIGNATURE_VALIDATION",
        resource=resources.CERTIFICATE,
        label="Signature Validation",
        value_type=ValueType.ENUM,
        property_name="signature_validation",
        enum_class=CertificateValidationStatus,
    ),
    FieldDescriptor(
        id="PRIVATE_KEY",
        resource=resources.CERTIFICATE,
        label="Has Private Key",
        value_type=ValueType.BOOLEAN,
        property_name="type",
        join_path=("key", "items"),
        related_resource=resources.CRYPTOGRAPHIC_KEY,
        multivalued_relation=True,
        exists_value=KeyType.PRIVATE_KEY.value,
    ),
    FieldDescriptor(
        id="TRUSTED_CA",
        resource=resources.CERTIFICATE,
        label="Trusted CA",
        value_type=ValueType.BOOLEAN,
        property_name="trusted_ca",
        settable=True,
    ),
    FieldDescriptor(
        id="UPLOADED_AT",
        resource=resources.CERTIFICATE,
        label="Uploaded At",
        value_type=ValueType.DATETIME,
        property_name="uploaded_at",
    ),
]

# Key listings are rooted at key items; key-level fields are reached through "key".
CRYPTOGRAPHIC_KEY_FIELDS = [
    FieldDescriptor(
        id="CKI_NAME",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Key Name",
        value_type=ValueType.STRING,
        property_name="name",
    ),
    FieldDescriptor(
        id="CKI_TYPE",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Key Type",
        value_type=ValueType.ENUM,
        property_name="type",
        enum_class=KeyType,
    ),
    FieldDescriptor(
        id="CKI_FORMAT",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Key Format",
        value_type=ValueType.ENUM,
        property_name="format",
        enum_class=KeyFormat,
    ),
    FieldDescriptor(
        id="CKI_STATE",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="State",
        value_type=ValueType.ENUM,
        property_name="state",
        enum_class=KeyState,
    ),
    FieldDescriptor(
        id="CKI_CRYPTOGRAPHIC_ALGORITHM",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Cryptographic Algorithm",
        value_type=ValueType.ENUM,
        property_name="key_algorithm",
        enum_class=KeyAlgorithm,
    ),
    # Items carry several usages, stored one row per usage.
    FieldDescriptor(
        id="CKI_USAGE",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Key Usage",
        value_type=ValueType.ENUM,
        property_name="usage",
        join_path=("usages",),
        multivalued_relation=True,
        enum_class=KeyUsage,
    ),
    FieldDescriptor(
        id="CKI_LENGTH",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Key Size",
        value_type=ValueType.NUMBER,
        property_name="length",
    ),
    FieldDescriptor(
        id="CK_TOKEN_PROFILE",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Token Profile",
        value_type=ValueType.STRING,
        property_name="name",
        join_path=("key", "token_profile"),
        related_resource=resources.TOKEN_PROFILE,
        settable=True,
    ),
    FieldDescriptor(
        id="CK_TOKEN_INSTANCE",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Token Instance",
        value_type=ValueType.STRING,
        property_name="name",
        join_path=("key", "token_instance"),
        related_resource=resources.TOKEN,
    ),
    FieldDescriptor(
        id="CK_GROUP",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Groups",
        value_type=ValueType.STRING,
        property_name="name",
        join_path=("key", "groups"),
        related_resource=resources.GROUP,
        multivalued_relation=True,
        settable=True,
    ),
    FieldDescriptor(
        id="CK_OWNER",
        resource=resources.CRYPTOGRAPHIC_KEY,
        label="Owner",
        value_type=ValueType.STRING,
        property_name="owner_username",
        join_path=("key", "owner"),
        related_resource=resources.USER,
        settable=True,
    ),
]

DISCOVERY_FIELDS = [
    FieldDescriptor(
        id="DISCOVERY_NAME",
        resource=resources.DISCOVERY,
        label="Name",
        value_type=ValueType.STRING,
        property_name="name",
    ),
    FieldDescriptor(
        id="DISCOVERY_START_TIME",
        resource=resources.DISCOVERY,
        label="Start Time",
        value_type=ValueType.DATETIME,
        property_name="start_time",
    ),
    FieldDescriptor(
        id="DISCOVERY_END_TIME",
        resource=resources.DISCOVERY,
        label="End Time",
        value_type=ValueType.DATETIME,
        property_name="end_time",
    ),
    FieldDescriptor(
        id="DISCOVERY_STATUS",
        resource=resources.DISCOVERY,
        label="Status",
        value_type=ValueType.ENUM,
        property_name="status",
        enum_class=DiscoveryStatus,
    ),
    FieldDescriptor(
        id="DISCOVERY_TOTAL_CERT_DISCOVERED",
        resource=resources.DISCOVERY,
        label="Total Certificates Discovered",
        value_type=ValueType.NUMBER,
        property_name="total_certificates_discovered",
    ),
    FieldDescriptor(
        id="DISCOVERY_CONNECTOR_NAME",
        resource=resources.DISCOVERY,
        label="Discovery Provider",
        value_type=ValueType.STRING,
        property_name="connector_name",
    ),
    FieldDescriptor(
        id="DISCOVERY_KIND",
        resource=resources.DISCOVERY,
        label="Kind",
        value_type=ValueType.STRING,
        property_name="kind",
    ),
]

ENTITY_FIELDS = [
    FieldDescriptor(
        id="ENTITY_NAME",
        resource=resources.ENTITY,
        label="Name",
        value_type=ValueType.STRING,
        property_name="name",
    ),
    FieldDescriptor(
        id="ENTITY_CONNECTOR_NAME",
        resource=resources.ENTITY,
        label="Entity Provider",
        value_type=ValueType.STRING,
        property_name="connector_name",
    ),
    FieldDescriptor(
        id="ENTITY_KIND",
        resource=resources.ENTITY,
        label="Kind",
        value_type=ValueType.STRING,
        property_name="kind",
    ),
]

LOCATION_FIELDS = [
    FieldDescriptor(
        id="LOCATION_NAME",
        resource=resources.LOCATION,
        label="Name",
        value_type=ValueType.STRING,
        property_name="name",
    ),
    FieldDescriptor(
        id="LOCATION_ENTITY_INSTANCE",
        resource=resources.LOCATION,
        label="Entity Instance",
        value_type=ValueType.STRING,
        property_name="entity_instance_name",
    ),
    FieldDescriptor(
        id="LOCATION_ENABLED",
        resource=resources.LOCATION,
        label="Enabled",
        value_type=ValueType.BOOLEAN,
        property_name="enabled",
    ),
    FieldDescriptor(
        id="LOCATION_SUPPORT_MULTIPLE_ENTRIES",
        resource=resources.LOCATION,
        label="Supports Multiple Entries",
        value_type=ValueType.BOOLEAN,
        property_name="support_multiple_entries",
    ),
    FieldDescriptor(
        id="LOCATION_SUPPORT_KEY_MANAGEMENT",
        resource=resources.LOCATION,
        label="Supports Key Management",
        value_type=ValueType.BOOLEAN,
        property_name="support_key_management",
    ),
]

FIELD_TABLE = [
    *CERTIFICATE_FIELDS,
    *CRYPTOGRAPHIC_KEY_FIELDS,
    *DISCOVERY_FIELDS,
    *ENTITY_FIELDS,
    *LOCATION_FIELDS,
]
