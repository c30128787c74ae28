# -*- coding: utf-8 -*-
"""
Turn an AST back into canonical infix text.

Every dice throw comes out as <count>d<sides>(%s); format_faces() fills
those placeholders with the faces that were actually rolled, in the order
the evaluator rolled them.
"""
from .diceset import faces_string
from .errors import DiceLangError, ErrorKind
from .tokens import (ARITHMETIC, COMPARISONS, DROPS, IDENT, NUMBER, PREFIX_BP, ROOT,
                     TAG_BP)

PLACEHOLDER = '(%s)'


def _invalid(node, reason):
    return DiceLangError('Invalid AST. Cannot convert {} to an infix expression: {}'
                         .format(node.sym, reason), ErrorKind.INVALID_AST)


def _split(node):
    """a node's children, as (operands, color tags, drops)"""
    operands, tags, drops = [], [], []
    for child in node.children:
        if child.sym == IDENT:
            tags.append(child.value.capitalize())
        elif child.sym in DROPS:
            drops.append(child)
        else:
            operands.append(child)
    return operands, tags, drops


def _drop_suffix(drops):
    """drop text for a throw, and any color tags that hung off the drop counts"""
    text, tags = '', []
    for drop in drops:
        if len(drop.children) != 1:
            raise _invalid(drop, 'expected a single count')
        count, count_tags = _operand(drop.children[0], drop.bp, True)
        text += drop.sym + count
        tags += count_tags
    return text, tags


def _with_tags(text, tags):
    return ' '.join([text] + tags)


def _operand(node, parent_bp, right_side):
    """text for an operand of an operator binding at parent_bp"""
    text, bp, tags = _unit(node)
    if bp < parent_bp or (right_side and bp == parent_bp):
        text = '({})'.format(text)
    return text, tags


def _unit(node):
    """
    (text, binding power, trailing tags) for one node.

    Color tags found inside a dice throw can't sit in the middle of it, so
    they're handed back to be written after the whole unit.
    """
    operands, tags, drops = _split(node)
    sym = node.sym

    if sym == NUMBER:
        suffix, drop_tags = _drop_suffix(drops)
        return node.value + suffix, TAG_BP, drop_tags + tags

    if sym == 'd':
        if len(operands) != 2:
            raise _invalid(node, 'a dice throw needs a count and a number of sides')
        count, count_tags = _operand(operands[0], node.bp, False)
        sides, sides_tags = _operand(operands[1], node.bp, True)
        suffix, drop_tags = _drop_suffix(drops)
        text = '{}d{}{}{}'.format(count, sides, suffix, PLACEHOLDER)
        return text, node.bp, count_tags + sides_tags + drop_tags + tags

    if sym == '-' and len(operands) == 1:
        operand, operand_tags = _operand(operands[0], PREFIX_BP, False)
        suffix, drop_tags = _drop_suffix(drops)
        return '-' + operand + suffix, PREFIX_BP, operand_tags + drop_tags + tags

    if sym in ARITHMETIC or sym in COMPARISONS:
        if len(operands) != 2:
            raise _invalid(node, 'expected two operands')
        # every binary operator groups to the left
        left, left_tags = _operand(operands[0], node.bp, False)
        right, right_tags = _operand(operands[1], node.bp, True)
        text = '{} {} {}'.format(_with_tags(left, left_tags), sym, _with_tags(right, right_tags))
        if drops:
            suffix, drop_tags = _drop_suffix(drops)
            return '({}){}'.format(text, suffix), TAG_BP, drop_tags + tags
        return text, node.bp, tags

    if sym == 'rep':
        if len(operands) != 2:
            raise _invalid(node, 'expected something to repeat and a count')
        text = _restring(operands[0])
        count = operands[1]
        if count.sym == NUMBER and not count.children:
            return ', '.join([text] * int(float(count.value))), node.bp, tags
        return '{} rep {}'.format(text, _restring(count)), node.bp, tags

    if sym == 'if':
        if len(operands) < 2:
            raise _invalid(node, 'expected a condition and a branch')
        if operands[1].sym == '{':
            return _if_statement(operands), 0, tags
        if len(operands) != 3:
            raise _invalid(node, 'expected a condition and two branches')
        then, then_tags = _operand(operands[1], node.bp, True)
        text = '{} if {} else {}'.format(_with_tags(then, then_tags),
                                         _restring(operands[0]), _restring(operands[2]))
        return text, node.bp, tags

    if sym == '(':
        if not operands:
            raise _invalid(node, 'nothing was called')
        func, func_tags = _operand(operands[0], node.bp, False)
        args = ', '.join(_restring(a) for a in operands[1:])
        return '{}({})'.format(_with_tags(func, func_tags), args), TAG_BP, tags

    if sym == '{':
        if not operands:
            return '{ }', 0, tags
        return '{ ' + ', '.join(_restring(c) for c in operands) + ' }', 0, tags

    if sym == 'roll':
        if len(operands) != 1:
            raise _invalid(node, 'expected a single statement')
        return 'Roll ' + _restring(operands[0]), 0, tags

    if sym == ROOT:
        return ', '.join(_restring(c) for c in operands), 0, tags

    raise _invalid(node, 'unknown symbol')


def _if_statement(operands):
    text = 'if {} {}'.format(_restring(operands[0]), _restring(operands[1]))
    if len(operands) > 2:
        text += ' else ' + _restring(operands[2])
    return text


def _restring(node):
    text, _, tags = _unit(node)
    return _with_tags(text, tags)


def restring(ast):
    """canonical infix text for ast, with a (%s) after every dice throw"""
    return _restring(ast).strip()


def format_faces(template, dice):
    """fill each placeholder of a restring with the faces of the matching throw"""
    parts = template.split('%s')
    faces = [faces_string(d.faces) for d in dice]
    # branches that never ran have placeholders but no throw
    faces += ['?'] * (len(parts) - 1 - len(faces))

    text = parts[0]
    for face, part in zip(faces, parts[1:]):
        text += face + part
    return text
