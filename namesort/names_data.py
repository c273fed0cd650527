# ═════════════════════════════════════════════════════════════════════════════════
# STATIC ORDERING DATA
# ═════════════════════════════════════════════════════════════════════════════════
#
# Constants shared by the loader, the comparator and the CLI:
# 1. DEFAULT_CODE: ordering code used for characters missing from the code table
# 2. DEFAULT_FILES: file names the batch reads and writes when none are given
# 3. BUILTIN_COMPOUND_SURNAMES: common two-character family names, used when no
#    surname list is supplied
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# Sentinel code; compared by length then value like any real code
DEFAULT_CODE = "66666"

DEFAULT_FILES = MappingProxyType(
    {
        "code_table": "data.json",
        "compound_surnames": "compound_surnames.txt",
        "names": "names.txt",
        "output": "out.txt",
    }
)

# Simplified forms only; traditional variants belong in a user-supplied list
BUILTIN_COMPOUND_SURNAMES = frozenset(
    {
        "欧阳",  # ou yang
        "司马",  # si ma
        "上官",  # shang guan
        "诸葛",  # zhu ge
        "东方",  # dong fang
        "皇甫",  # huang fu
        "尉迟",  # yu chi
        "公孙",  # gong sun
        "令狐",  # ling hu
        "慕容",  # mu rong
        "夏侯",  # xia hou
        "长孙",  # zhang sun
        "宇文",  # yu wen
        "司徒",  # si tu
        "司空",  # si kong
        "轩辕",  # xuan yuan
        "端木",  # duan mu
        "西门",  # xi men
        "南宫",  # nan gong
        "独孤",  # du gu
        "申屠",  # shen tu
        "澹台",  # tan tai
        "公冶",  # gong ye
        "宗政",  # zong zheng
        "濮阳",  # pu yang
        "淳于",  # chun yu
        "单于",  # chan yu
        "太叔",  # tai shu
        "仲孙",  # zhong sun
        "钟离",  # zhong li
        "闻人",  # wen ren
        "赫连",  # he lian
        "呼延",  # hu yan
        "万俟",  # mo qi
        "拓跋",  # tuo ba
        "百里",  # bai li
        "第五",  # di wu
        "左丘",  # zuo qiu
        "公羊",  # gong yang
        "谷梁",  # gu liang
        "乐正",  # yue zheng
        "漆雕",  # qi diao
        "壤驷",  # rang si
        "公良",  # gong liang
        "段干",  # duan gan
        "巫马",  # wu ma
        "亓官",  # qi guan
        "司寇",  # si kou
        "子车",  # zi ju
        "颛孙",  # zhuan sun
    }
)
