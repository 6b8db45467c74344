from textwrap import TextWrapper
from typing import Any, List, Tuple

from asciitree import BoxStyle, LeftAligned
from asciitree.traversal import Traversal


def info_text_report(items: List[Tuple[Any, Any]]) -> str:
    keys = [k for k, v in items]
    max_key_len = max(len(k) for k in keys)
    report = ''
    for k, v in items:
        wrapper = TextWrapper(width=80,
                              initial_indent=k.ljust(max_key_len) + ' : ',
                              subsequent_indent=' '*max_key_len + ' : ')
        text = wrapper.fill(str(v))
        report += text + '\n'
    return report


def info_html_report(items) -> str:
    report = '<table class="axiskeys-info">'
    report += '<tbody>'
    for k, v in items:
        report += '<tr>' \
                  '<th style="text-align: left">%s</th>' \
                  '<td style="text-align: left">%s</td>' \
                  '</tr>' \
                  % (k, v)
    report += '</tbody>'
    report += '</table>'
    return report


class InfoReporter:

    def __init__(self, obj):
        self.obj = obj

    def __repr__(self):
        items = self.obj.info_items()
        return info_text_report(items)

    def _repr_html_(self):
        items = self.obj.info_items()
        return info_html_report(items)


class TreeNode:
    """One layer of a wrapped array. Wrappers have the next layer inward as their
    only child, the raw array is a leaf."""

    def __init__(self, obj, depth=0, level=None):
        self.obj = obj
        self.depth = depth
        self.level = level

    def is_wrapper(self):
        return hasattr(self.obj, 'layer_summary') and hasattr(self.obj, 'parent')

    def get_children(self):
        if self.is_wrapper():
            if self.level is None or self.depth < self.level:
                return [TreeNode(self.obj.parent, depth=self.depth + 1,
                                 level=self.level)]
        return []

    def get_text(self):
        if self.is_wrapper():
            return self.obj.layer_summary()
        text = self.get_type()
        if hasattr(self.obj, 'shape'):
            text += ' {} {}'.format(tuple(self.obj.shape), getattr(self.obj, 'dtype', ''))
        return text.rstrip()

    def get_type(self):
        return type(self.obj).__name__


class TreeTraversal(Traversal):

    def get_children(self, node):
        return node.get_children()

    def get_root(self, tree):
        return tree

    def get_text(self, node):
        return node.get_text()


class TreeViewer:

    def __init__(self, array, level=None):

        self.array = array
        self.level = level

        self.text_kwargs = dict(
            horiz_len=2,
            label_space=1,
            indent=1
        )

        self.bytes_kwargs = dict(
            UP_AND_RIGHT="+",
            HORIZONTAL="-",
            VERTICAL="|",
            VERTICAL_AND_RIGHT="+"
        )

        self.unicode_kwargs = dict(
            UP_AND_RIGHT="└",
            HORIZONTAL="─",
            VERTICAL="│",
            VERTICAL_AND_RIGHT="├"
        )

    def __bytes__(self):
        drawer = LeftAligned(
            traverse=TreeTraversal(),
            draw=BoxStyle(gfx=self.bytes_kwargs, **self.text_kwargs)
        )
        root = TreeNode(self.array, level=self.level)
        return drawer(root).encode()

    def __unicode__(self):
        drawer = LeftAligned(
            traverse=TreeTraversal(),
            draw=BoxStyle(gfx=self.unicode_kwargs, **self.text_kwargs)
        )
        root = TreeNode(self.array, level=self.level)
        return drawer(root)

    def __repr__(self):
        return self.__unicode__()
