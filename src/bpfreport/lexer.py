"""Pygments lexer for BPF C programs."""

from __future__ import annotations

from pygments.lexers.c_cpp import CLexer
from pygments.token import Keyword, Name
from pygments.util import get_bool_opt


class BpfCLexer(CLexer):
    """C with the vocabulary of libbpf programs.

    On top of plain C this recognises the kernel's fixed-width integer
    types, the ``bpf_*`` helper functions and the libbpf section and
    CO-RE macros.

    Additional options accepted:

    `bpfhighlighting`
        Highlight BPF helpers, libbpf macros and kernel types
        (default: ``True``).
    """

    name = "BPF C"
    aliases = ["bpf-c", "bpfc"]
    filenames = ["*.bpf.c", "*.bpf.h"]
    mimetypes = ["text/x-bpf-csrc"]

    kernel_types = {
        "u8", "u16", "u32", "u64", "s8", "s16", "s32", "s64",
        "__u8", "__u16", "__u32", "__u64", "__s8", "__s16", "__s32", "__s64",
        "__be16", "__be32", "__be64", "__le16", "__le32", "__le64",
        "__wsum", "__sum16",
    }

    libbpf_macros = {
        "SEC",
        "BPF_PROG",
        "BPF_KPROBE",
        "BPF_KRETPROBE",
        "BPF_KSYSCALL",
        "BPF_UPROBE",
        "BPF_URETPROBE",
        "BPF_CORE_READ",
        "BPF_CORE_READ_INTO",
        "BPF_CORE_READ_STR_INTO",
        "BPF_CORE_READ_BITFIELD",
        "BPF_PROBE_READ",
        "BPF_SEQ_PRINTF",
        "__uint",
        "__type",
        "__array",
        "__ulong",
        "__always_inline",
        "__noinline",
        "__weak",
        "__ksym",
        "__kconfig",
    }

    def __init__(self, **options):
        self.bpfhighlighting = get_bool_opt(options, "bpfhighlighting", True)
        super().__init__(**options)

    def get_tokens_unprocessed(self, text, stack=("root",)):
        for index, token, value in super().get_tokens_unprocessed(text, stack):
            if self.bpfhighlighting and token in Name and token not in Name.Builtin:
                if value in self.libbpf_macros:
                    token = Name.Function.Magic
                elif token is Name and value.startswith("bpf_"):
                    token = Name.Builtin
                elif token is Name and value in self.kernel_types:
                    token = Keyword.Type
            yield index, token, value
