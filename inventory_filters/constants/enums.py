"""
Choices shared by the attribute store and the inventory field catalog.
"""

from django.db import models


class AttributeKind(models.TextChoices):
    """Origin of a stored attribute value."""

    METADATA = "METADATA", "Metadata"
    CUSTOM = "CUSTOM", "Custom"


class AttributeContentType(models.TextChoices):
    """Content type of a stored attribute value."""

    STRING = "STRING", "String"
    TEXT = "TEXT", "Text"
    CODEBLOCK = "CODEBLOCK", "Code block"
    INTEGER = "INTEGER", "Integer"
    FLOAT = "FLOAT", "Float"
    BOOLEAN = "BOOLEAN", "Boolean"
    DATE = "DATE", "Date"
    TIME = "TIME", "Time"
    DATETIME = "DATETIME", "Date and time"
    SECRET = "SECRET", "Secret"
    FILE = "FILE", "File"
    CREDENTIAL = "CREDENTIAL", "Credential"
    OBJECT = "OBJECT", "Object"


class CertificateState(models.TextChoices):
    REQUESTED = "requested", "Requested"
    REJECTED = "rejected", "Rejected"
    PENDING_APPROVAL = "pending_approval", "Pending approval"
    ISSUED = "issued", "Issued"
    REVOKED = "revoked", "Revoked"
    FAILED = "failed", "Failed"
    ARCHIVED = "archived", "Archived"


class CertificateValidationStatus(models.TextChoices):
    NOT_CHECKED = "not_checked", "Not checked"
    VALID = "valid", "Valid"
    INVALID = "invalid", "Invalid"
    EXPIRING = "expiring", "Expiring"
    EXPIRED = "expired", "Expired"
    REVOKED = "revoked", "Revoked"


class KeyType(models.TextChoices):
    PUBLIC_KEY = "Public", "Public key"
    PRIVATE_KEY = "Private", "Private key"
    SECRET_KEY = "Secret", "Secret key"


class KeyState(models.TextChoices):
    PRE_ACTIVE = "preActive", "Pre-active"
    ACTIVE = "active", "Active"
    DEACTIVATED = "deactivated", "Deactivated"
    COMPROMISED = "compromised", "Compromised"
    DESTROYED = "destroyed", "Destroyed"


class DiscoveryStatus(models.TextChoices):
    IN_PROGRESS = "inProgress", "In progress"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"
    WARNING = "warning", "Warning"


class ComplianceStatus(models.TextChoices):
    OK = "ok", "Compliant"
    NOK = "nok", "Not compliant"
    NA = "na", "Not applicable"
    NOT_CHECKED = "not_checked", "Not checked"
    FAILED = "failed", "Failed"


class KeyFormat(models.TextChoices):
    RAW = "Raw", "Raw"
    SPKI = "SubjectPublicKeyInfo", "Subject public key info"
    PRKI = "PrivateKeyInfo", "Private key info"
    EPRKI = "EncryptedPrivateKeyInfo", "Encrypted private key info"
    CUSTOM = "Custom", "Custom"


class KeyAlgorithm(models.TextChoices):
    RSA = "RSA", "RSA"
    ECDSA = "ECDSA", "ECDSA"
    FALCON = "FALCON", "Falcon"
    DILITHIUM = "CRYSTALS-Dilithium", "CRYSTALS-Dilithium"
    SPHINCSPLUS = "SPHINCS+", "SPHINCS+"
    UNKNOWN = "Unknown", "Unknown"


class KeyUsage(models.TextChoices):
    SIGN = "sign", "Sign"
    VERIFY = "verify", "Verify"
    ENCRYPT = "encrypt", "Encrypt"
    DECRYPT = "decrypt", "Decrypt"
    WRAP = "wrap", "Wrap"
    UNWRAP = "unwrap", "Unwrap"
