import pytest

from postats.classes import CatalogFile

GERMAN = """\
# a
# a
# b
msgid ""
msgstr ""
"Language: de\\n"
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "x"
msgstr "hi"

msgid "x"
msgstr ""
"""

FRENCH = """\
msgid ""
msgstr ""
"Language: fr\\n"

#, fuzzy
msgid "Open"
msgstr "Ouvrir"

#, fuzzy
#~ msgid "Close"
#~ msgstr "Fermer"
"""

TEMPLATE = """\
# SOME DESCRIPTIVE TITLE.
msgid ""
msgstr ""
"Project-Id-Version: demo\\n"

#: src/main.c:10
msgid "Open"
msgstr ""
"""


@pytest.fixture
def german():
    return GERMAN


@pytest.fixture
def french():
    return FRENCH


@pytest.fixture
def template():
    return TEMPLATE


@pytest.fixture
def make_file():
    def make_file(filename, contents):
        return CatalogFile(filename, contents)

    return make_file
