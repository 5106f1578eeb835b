import re
from collections import OrderedDict
from numbers import Integral, Real

from packaging.version import Version, InvalidVersion

from dacqio.core.errors import MalformedHeader


class DacqHeader(OrderedDict):
    """
    Representation of the text header found at the top of every DACQ file.

    The OrderedDict contains one entry per header line, in file order. Values
    made only of digits and whitespace are converted to int, every other
    value is kept as the raw string. `timebase` and `sample_rate` are written
    with a ' hz' suffix in the file; it is removed before conversion and put
    back by :meth:`to_text`.

    Usage::

        header = DacqHeader.from_text('trial_date Friday, 15 Aug 2014\\n'
                                      'timebase 96000 hz\\n')
        header['timebase']  # 96000
        header.to_text()    # original text
    """

    encoding = 'cp1252'

    # keys stored with a unit suffix
    hz_keys = ('timebase', 'sample_rate')
    hz_suffix = ' hz'

    _line_pat = re.compile(r'(?P<key>\S+)\s+(?P<value>.*)')
    _numeric_pat = re.compile(r'[\s\d]+')
    _whitespace_pat = re.compile(r'\s')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # keys whose value is written back with the ' hz' suffix
        self.suffixed_keys = set(self.hz_keys)

    @classmethod
    def from_text(cls, header_text, filename=None):
        """
        Parse header text into a DacqHeader.

        :param header_text: header as str (or bytes, decoded as cp1252)
        :param filename: only used to give context to errors
        """
        if isinstance(header_text, (bytes, bytearray)):
            header_text = bytes(header_text).decode(cls.encoding)

        header = cls()
        header.suffixed_keys = set()
        for line_num, line in enumerate(header_text.splitlines()):
            if not line.strip():
                continue
            match = cls._line_pat.fullmatch(line.rstrip('\r\n'))
            if match is None or not match.group('value').strip():
                raise MalformedHeader(f'Header line {line_num + 1} has no value: {line!r}',
                                      filename=filename)
            key, value = match.group('key'), match.group('value')
            if key in header:
                raise MalformedHeader(f'Duplicate header key {key!r} on line {line_num + 1}',
                                      filename=filename)
            if key in cls.hz_keys and value.endswith(cls.hz_suffix):
                value = value[:-len(cls.hz_suffix)]
                header.suffixed_keys.add(key)
            header[key] = cls.convert_value(value)
        return header

    @classmethod
    def convert_value(cls, value):
        """
        Return `value` as int if it is made only of digits and whitespace,
        otherwise return it unchanged.

        A value with several digit groups such as '1 2' is also made only of
        digits and whitespace, but it has no single numeric reading: it is
        kept as the raw string rather than turned into a list of ints.
        """
        stripped = value.strip()
        if cls._numeric_pat.fullmatch(value) and stripped.isdecimal():
            return int(stripped)
        return value

    @staticmethod
    def format_value(value):
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, Integral):
            return str(int(value))
        if isinstance(value, Real):
            value = float(value)
            if value.is_integer():
                return str(int(value))
            return repr(value)
        return str(value)

    def to_text(self):
        """
        Serialize the header, one 'key value' line per entry in insertion
        order.

        Raises MalformedHeader for entries that would not parse back to the
        same key and value: an empty key or one containing whitespace, and a
        value that is empty or holds a line break.
        """
        lines = []
        for key, value in self.items():
            key = str(key)
            if not key or self._whitespace_pat.search(key):
                raise MalformedHeader(f'Header key {key!r} is empty or contains whitespace')
            txt = self.format_value(value)
            if not txt.strip():
                raise MalformedHeader(f'Header entry {key!r} has an empty value')
            if txt.splitlines() != [txt]:
                raise MalformedHeader(f'Header entry {key!r} contains a line break: {txt!r}')
            if key in self.suffixed_keys and key in self.hz_keys:
                txt += self.hz_suffix
            lines.append(f'{key} {txt}\n')
        return ''.join(lines)

    def to_bytes(self):
        text = self.to_text()
        try:
            return text.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise MalformedHeader(f'Header text can not be encoded as {self.encoding}: '
                                  f'{e.object[e.start:e.end]!r}') from None

    def require(self, key, filename=None):
        """
        Return the value of `key`, raising MalformedHeader if it is absent.
        """
        try:
            return self[key]
        except KeyError:
            raise MalformedHeader(f'Header has no {key!r} entry', filename=filename) from None

    def require_int(self, key, filename=None):
        value = self.require(key, filename=filename)
        if isinstance(value, Integral):
            return int(value)
        try:
            return int(float(str(value).replace(self.hz_suffix, '')))
        except ValueError:
            raise MalformedHeader(f'Header entry {key!r} is not numeric: {value!r}',
                                  filename=filename) from None

    def require_rate(self, key, filename=None):
        """
        Return a rate entry as float. Values left as strings by the numeric
        heuristic ('250.0', '4800.0 hz') are converted here.
        """
        value = self.require(key, filename=filename)
        try:
            return float(str(value).replace(self.hz_suffix, ''))
        except ValueError:
            raise MalformedHeader(f'Header entry {key!r} is not a rate: {value!r}',
                                  filename=filename) from None

    @property
    def sw_version(self):
        """
        The acquisition software version as a packaging Version, or None if
        absent or unparsable.
        """
        value = self.get('sw_version')
        if value is None:
            return None
        try:
            return Version(str(value).strip())
        except InvalidVersion:
            return None

    def copy(self):
        new = self.__class__(self)
        new.suffixed_keys = set(self.suffixed_keys)
        return new


def parse_header(header_text, filename=None):
    return DacqHeader.from_text(header_text, filename=filename)


def serialize_header(header):
    if not isinstance(header, DacqHeader):
        header = DacqHeader(header)
    return header.to_text()
