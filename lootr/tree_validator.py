from typing import Any, Dict, List

from lootr.drop_rules import ITEM_KEYS, NODE_KEYS, SEPARATOR


def validate_tree_dict(data: Any) -> Dict[str, Any]:
    """
    Check a nested authoring dict before it is turned into a LootNode.

        {"items": ["Staff", {"name": "Uzi", "props": {"ammo": "9mm"}}],
         "branches": {"armor": {"items": ["Boots"]}}}

    Errors make the dict unusable, warnings are kept for the author.
    """
    errors: List[Dict[str, str]] = []
    warnings: List[Dict[str, str]] = []

    summary = {
        "total_items": 0,
        "branches": 0,
        "max_depth": 0,
    }

    # ---- top-level must be dict ----
    if not isinstance(data, dict):
        errors.append({
            "path": "$",
            "message": "Top-level tree must be an object/dict with 'items' and/or 'branches'."
        })
        return {
            "valid": False,
            "errors": errors,
            "warnings": warnings,
            "summary": summary,
        }

    _walk_node(data, "$", 0, errors, warnings, summary, {id(data)})

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "summary": summary,
    }


def _walk_node(node, path, depth, errors, warnings, summary, ancestors):
    summary["max_depth"] = max(summary["max_depth"], depth)

    unknown = [k for k in node if k not in NODE_KEYS]
    if unknown:
        warnings.append({
            "path": path,
            "message": f"Unknown node keys ignored: {', '.join(map(str, unknown))}. Allowed: {NODE_KEYS}"
        })

    items = node.get("items", [])
    branches = node.get("branches", {})

    if not isinstance(items, list):
        errors.append({
            "path": f"{path}.items",
            "message": "items must be a list of names or item objects."
        })
        items = []

    if not isinstance(branches, dict):
        errors.append({
            "path": f"{path}.branches",
            "message": "branches must be an object/dict of named nodes."
        })
        branches = {}

    if not items and not branches:
        warnings.append({
            "path": path,
            "message": "Node has no items and no branches, drops from here always miss."
        })

    # Walk items
    for i, item in enumerate(items):
        if _check_item(item, f"{path}.items[{i}]", errors, warnings):
            summary["total_items"] += 1

    # Walk branches
    for name, child in branches.items():
        child_path = f"{path}.branches.{name}"

        if not isinstance(name, str) or not name.strip():
            errors.append({
                "path": child_path,
                "message": "Branch name must be a non-empty string."
            })
            continue

        if SEPARATOR in name:
            errors.append({
                "path": child_path,
                "message": f"Branch name must not contain '{SEPARATOR}'."
            })
            continue

        if not isinstance(child, dict):
            errors.append({
                "path": child_path,
                "message": "Branch must be an object/dict node."
            })
            continue

        if id(child) in ancestors:
            errors.append({
                "path": child_path,
                "message": "Branch cycles back to an ancestor."
            })
            continue

        summary["branches"] += 1
        _walk_node(child, child_path, depth + 1, errors, warnings, summary, ancestors | {id(child)})


def _check_item(item, path, errors, warnings) -> bool:
    # bare names are items without props
    if isinstance(item, str):
        if not item.strip():
            errors.append({
                "path": path,
                "message": "Item name must be a non-empty string."
            })
            return False
        return True

    if not isinstance(item, dict):
        errors.append({
            "path": path,
            "message": "Item must be a name string or an object/dict."
        })
        return False

    if "name" not in item:
        errors.append({
            "path": path,
            "message": "Missing required field: name"
        })
        return False

    name = item["name"]
    if not isinstance(name, str) or not name.strip():
        errors.append({
            "path": f"{path}.name",
            "message": "Item name must be a non-empty string."
        })
        return False

    unknown = [k for k in item if k not in ITEM_KEYS]
    if unknown:
        warnings.append({
            "path": path,
            "message": f"Unknown item keys ignored: {', '.join(map(str, unknown))}."
        })

    props = item.get("props", {})
    if not isinstance(props, dict):
        errors.append({
            "path": f"{path}.props",
            "message": "props must be an object/dict of string values."
        })
        return False

    bad = [k for k, v in props.items() if not isinstance(k, str) or not isinstance(v, str)]
    if bad:
        errors.append({
            "path": f"{path}.props",
            "message": f"Property keys and values must be strings: {', '.join(map(str, bad))}"
        })
        return False

    return True
