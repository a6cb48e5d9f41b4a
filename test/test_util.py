import pytest

from multifollow.util import (
    coerce_str, display_width, expand_path, pad, partition, trim_label,
)


@pytest.mark.parametrize('text,width,expected', [
    ('', 5, ['']),
    ('short', 5, ['short']),
    ('abcdef', 5, ['abcde', 'f']),
    ('abcdefghij', 5, ['abcde', 'fghij']),
    ('abc', 1, ['a', 'b', 'c']),
    ('héllo wörld', 4, ['héll', 'o wö', 'rld']),
])
def test_partition(text, width, expected):
    assert partition(text, width) == expected


@pytest.mark.parametrize('text', [
    'x' * 120,
    'résumé ' * 30,
    '日本語のログ行です' * 9,
    '\U0001f600 emoji \U0001f680' * 12,
])
@pytest.mark.parametrize('width', [1, 7, 59])
def test_partition_properties(text, width):
    fragments = partition(text, width)
    assert ''.join(fragments) == text
    assert all(len(f) <= width for f in fragments)
    # each fragment must stand alone as valid utf-8, nothing cut mid char
    assert b''.join(f.encode('utf-8') for f in fragments) == \
        text.encode('utf-8')


def test_partition_invalid_width():
    with pytest.raises(ValueError):
        partition('text', 0)


@pytest.mark.parametrize('label,expected', [
    ('app.log', 'app.log'),
    ('a' * 17, 'a' * 17),
    ('/var/log/containers/web.log', '...ainers/web.log'),
    ('/var/log/ünïcödé/wéb.lög', '...nïcödé/wéb.lög'),
])
def test_trim_label(label, expected):
    assert trim_label(label) == expected


@pytest.mark.parametrize('label', [
    '/a/very/long/path/to/a/file.log',
    'x' * 18,
    'ß' * 40,
])
@pytest.mark.parametrize('width', [5, 17, 30])
def test_trim_label_properties(label, width):
    trimmed = trim_label(label, width)
    if len(label) <= width:
        assert trimmed == label
    else:
        assert len(trimmed) == width
        assert trimmed.startswith('...')
        assert trimmed.endswith(label[-(width - 3):])


def test_expand_path(monkeypatch):
    monkeypatch.setenv('HOME', '/home/someone')
    monkeypatch.setenv('LOGDIR', '/var/log')
    assert expand_path('~/app.log') == '/home/someone/app.log'
    assert expand_path('$LOGDIR/app.log') == '/var/log/app.log'
    assert expand_path('/plain/path') == '/plain/path'


def test_coerce_str():
    assert coerce_str(b'caf\xc3\xa9') == 'café'
    assert coerce_str(b'bad \xff byte') == 'bad \ufffd byte'
    assert coerce_str('already text') == 'already text'


@pytest.mark.parametrize('text,columns', [
    ('app.log', 7),
    ('日本.log', 8),
    ('ｆｕｌｌ', 8),
    ('', 0),
])
def test_display_width(text, columns):
    assert display_width(text) == columns


def test_pad():
    assert pad('日本.log', 17) == '日本.log' + ' ' * 9
    assert pad('x' * 20, 17) == 'x' * 20
