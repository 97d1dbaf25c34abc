__version__ = "0.1.0"

LOG_NAME = "ernie-datacite"

DATACITE_NAMESPACE = "http://datacite.org/schema/kernel-4"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
SCHEMA_LOCATION = (
    f"{DATACITE_NAMESPACE} https://schema.datacite.org/meta/kernel-4.6/metadata.xsd"
)

ROR_URI = "https://ror.org"
ORCID_URI = "https://orcid.org"
GCMD_CONCEPT_URI = "https://gcmd.earthdata.nasa.gov/kms/concept"
