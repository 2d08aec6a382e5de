"""Immutable node tree produced by the jsonblade parser.

Node Categories:
    Output: Data, Output, Comment
    Control flow: If, Unless, Each
    Variables: Set
    Expressions: Pipeline, Path, FuncCall, FilterCall, Const, PathArg
    Structure: TemplateNode

"""

from jsonblade.nodes.base import Node
from jsonblade.nodes.control_flow import Each, If, Unless
from jsonblade.nodes.expressions import (
    Const,
    Expr,
    FilterCall,
    FuncCall,
    Path,
    PathArg,
    Pipeline,
)
from jsonblade.nodes.output import Comment, Data, Output
from jsonblade.nodes.structure import TemplateNode
from jsonblade.nodes.variables import Set

__all__ = [
    "Comment",
    "Const",
    "Data",
    "Each",
    "Expr",
    "FilterCall",
    "FuncCall",
    "If",
    "Node",
    "Output",
    "Path",
    "PathArg",
    "Pipeline",
    "Set",
    "TemplateNode",
    "Unless",
]
