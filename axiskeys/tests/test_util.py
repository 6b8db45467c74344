import textwrap

import numpy as np

from axiskeys import wrapdims
from axiskeys.util import InfoReporter, TreeViewer, info_html_report, info_text_report


def test_info_text_report():
    items = [('foo', 'bar'), ('baz', 'qux')]
    expect = "foo : bar\nbaz : qux\n"
    assert expect == info_text_report(items)


def test_info_html_report():
    items = [('foo', 'bar'), ('baz', 'qux')]
    actual = info_html_report(items)
    assert '<table' == actual[:6]
    assert '</table>' == actual[-8:]
    assert '<th style="text-align: left">foo</th>' in actual


def test_info():
    a = wrapdims(np.zeros((2, 3)), row=[10, 20], col=["a", "b", "c"])
    assert isinstance(a.info, InfoReporter)
    items = a.info_items()
    keys = [k for k, _ in items]
    expected_keys = [
        'Type', 'Layers', 'Data type', 'Shape', 'Dimension names', 'Keys [row]',
        'Keys [col]'
    ]
    assert expected_keys == keys
    expect = textwrap.dedent("""\
        Type            : axiskeys.keyed.KeyedArray
        Layers          : KeyedArray > NamedDimsArray > ndarray
        Data type       : float64
        Shape           : (2, 3)
        Dimension names : ('row', 'col')
        Keys [row]      : list[10, 20] (2)
        Keys [col]      : list['a', 'b', 'c'] (3)
        """)
    assert expect == repr(a.info)
    assert a.info._repr_html_().startswith('<table')


def test_info_without_names_or_keys():
    keys = [k for k, _ in wrapdims(np.zeros(3), range(3)).info_items()]
    assert ['Type', 'Layers', 'Data type', 'Shape', 'Keys [0]'] == keys
    keys = [k for k, _ in wrapdims(np.zeros(3), "x").info_items()]
    assert ['Type', 'Layers', 'Data type', 'Shape', 'Dimension names'] == keys


def test_tree():
    a = wrapdims(np.zeros((2, 3)), row=range(10, 30, 10), col=["a", "b", "c"])
    tree = a.tree()
    assert isinstance(tree, TreeViewer)
    expect_bytes = textwrap.dedent("""\
        KeyedArray keys=(KeyRange(start=10, step=10, length=2), list['a', 'b', 'c'] (3))
         +-- NamedDimsArray names=('row', 'col')
             +-- ndarray (2, 3) float64""").encode()
    expect_text = textwrap.dedent("""\
        KeyedArray keys=(KeyRange(start=10, step=10, length=2), list['a', 'b', 'c'] (3))
         └── NamedDimsArray names=('row', 'col')
             └── ndarray (2, 3) float64""")
    assert expect_bytes == bytes(tree)
    assert expect_text == repr(tree)

    expect_text = textwrap.dedent("""\
        KeyedArray keys=(KeyRange(start=10, step=10, length=2), list['a', 'b', 'c'] (3))
         └── NamedDimsArray names=('row', 'col')""")
    assert expect_text == repr(a.tree(level=1))

    assert "ndarray (2,) float64" == repr(TreeViewer(np.zeros(2)))
