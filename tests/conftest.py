import pytest

PROJECT_XML = """<Project>
  <EntityDefs>
    <EntityDef name="Doc">
      <Attributes>
        <Attribute name="Title"/>
        <Attribute name="TurnoverName">
          <Type>string</Type>
        </Attribute>
      </Attributes>
    </EntityDef>
    <EntityDef name="Invoice">
      <Attributes>
        <Attribute name="Total"/>
      </Attributes>
    </EntityDef>
  </EntityDefs>
</Project>
"""

SCHEMA_XSD = """<xs:schema>
  <xs:element name="order">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="id"/>
        <xs:element name="total"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""


def _cursor_in(text: str, fragment: str, occurrence: int = 1) -> int:
    """Offset just inside the n-th occurrence of ``fragment``"""
    offset = -1
    for _ in range(occurrence):
        offset = text.index(fragment, offset + 1)
    return offset + 1


@pytest.fixture
def project_xml():
    return PROJECT_XML


@pytest.fixture
def schema_xsd():
    return SCHEMA_XSD


@pytest.fixture
def cursor_in():
    return _cursor_in
