import logging
from typing import Dict, List, Mapping, Sequence

logger = logging.getLogger(__name__)


def build_comment_tree(flat: Sequence[Mapping]) -> List[dict]:
    """
    Chuyển danh sách bình luận phẳng thành cây (rừng) bình luận.

    Mỗi phần tử cần có 'id' và có thể có 'parent_id'. Thứ tự giữa các anh em
    giữ nguyên theo thứ tự đầu vào. Bình luận có parent_id không tồn tại
    trong danh sách được coi là gốc để không làm mất dữ liệu.
    """
    nodes: Dict[str, dict] = {}
    roots: List[dict] = []

    for node in flat:
        nodes[node["id"]] = {**node, "children": []}

    for node in flat:
        current = nodes[node["id"]]
        parent_id = node.get("parent_id")
        if parent_id:
            parent = nodes.get(parent_id)
            if parent is not None:
                parent["children"].append(current)
            else:
                # Bình luận cha đã bị xóa -> coi là gốc
                logger.warning("Orphaned comment %s: parent %s not found", node["id"], parent_id)
                roots.append(current)
        else:
            roots.append(current)

    return roots
