"""Built-in seed document used when no document path is configured."""

from mycelium.models.node import utc_now


def _node(node_id: str, label: str, description: str, node_type: str, status: str,
          tags: list[str], created: str, children: list[dict] | None = None) -> dict:
    data = {
        "id": node_id,
        "label": label,
        "description": description,
        "metadata": {"type": node_type, "status": status, "tags": tags, "created": created},
    }
    if children is not None:
        data["children"] = children
    return data


def seed_document() -> dict:
    """Fresh copy of the starter mind map, timestamped now."""
    now = utc_now().isoformat()
    return _node(
        "root", "Central Spore", "The origin point of the neural mycelium network.",
        "root", "active", ["origin", "core"], now,
        children=[
            _node(
                "c1", "Neural Plasticity", "Ability of the network to reorganize itself.",
                "concept", "active", ["brain", "adaptation"], now,
                children=[
                    _node("c1-1", "Synaptic Pruning", "Removal of weak connections.",
                          "task", "pending", ["optimization"], now),
                    _node("c1-2", "Axonal Growth", "Extension of new pathways.",
                          "concept", "active", ["growth"], now),
                ],
            ),
            _node(
                "c2", "Substrate Synthesis", "Processing raw data into usable patterns.",
                "concept", "active", ["data", "processing"], now,
                children=[
                    _node("c2-1", "Raw Ingestion", "Intake of unstructured signals.",
                          "task", "completed", ["input"], now),
                    _node(
                        "c2-2", "Pattern Matching", "Identifying recurring sequences.",
                        "concept", "active", ["analysis"], now,
                        children=[
                            _node("c2-2-1", "Anomaly Detection", "Flagging irregularities in the stream.",
                                  "note", "active", ["security"], now),
                        ],
                    ),
                ],
            ),
            _node(
                "c3", "Biolume Feedback", "Visual signaling of network health.",
                "concept", "active", ["ui", "feedback"], now,
                children=[
                    _node("c3-1", "Pulse Rate", "Frequency of updates.",
                          "note", "active", ["metrics"], now),
                ],
            ),
        ],
    )
