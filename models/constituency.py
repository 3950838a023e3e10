"""
选区静态数据

项目记录的 constituency 字段以名称引用此列表。
"""

UGANDAN_CONSTITUENCIES = [
    {'id': 'KLA-CEN', 'name': 'Kampala Central Division', 'district': 'Kampala'},
    {'id': 'KLA-KWN', 'name': 'Kawempe North', 'district': 'Kampala'},
    {'id': 'KLA-KWS', 'name': 'Kawempe South', 'district': 'Kampala'},
    {'id': 'KLA-MKE', 'name': 'Makindye East', 'district': 'Kampala'},
    {'id': 'KLA-MKW', 'name': 'Makindye West', 'district': 'Kampala'},
    {'id': 'KLA-NKE', 'name': 'Nakawa East', 'district': 'Kampala'},
    {'id': 'KLA-NKW', 'name': 'Nakawa West', 'district': 'Kampala'},
    {'id': 'KLA-RBN', 'name': 'Rubaga North', 'district': 'Kampala'},
    {'id': 'KLA-RBS', 'name': 'Rubaga South', 'district': 'Kampala'},
    {'id': 'WAK-ENT', 'name': 'Entebbe Municipality', 'district': 'Wakiso'},
    {'id': 'WAK-KYD', 'name': 'Kyadondo East', 'district': 'Wakiso'},
    {'id': 'MUK-MUN', 'name': 'Mukono Municipality', 'district': 'Mukono'},
    {'id': 'JIN-NTH', 'name': 'Jinja North City', 'district': 'Jinja'},
    {'id': 'GUL-EST', 'name': 'Gulu East City', 'district': 'Gulu'},
    {'id': 'MBR-MUN', 'name': 'Mbarara City North', 'district': 'Mbarara'},
    {'id': 'MBL-MUN', 'name': 'Mbale Industrial City', 'district': 'Mbale'},
    {'id': 'ARU-CEN', 'name': 'Arua Central', 'district': 'Arua'},
    {'id': 'LIR-EST', 'name': 'Lira East', 'district': 'Lira'},
]


def constituency_names(constituencies=None):
    """返回选区名称列表（保持原有顺序）"""
    constituencies = UGANDAN_CONSTITUENCIES if constituencies is None else constituencies
    return [c['name'] for c in constituencies]
