"""Generate Mermaid diagrams and metrics summaries for the sample snippets."""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from snippetflow import CodeAnalyzer
from snippetflow.classify.profiles import DEFAULT_PROFILE_ID, profile_for_path
from snippetflow.graph import control_flow_graph_to_mermaid

if __name__ == "__main__":
    snippet_dir = Path(__file__).parent / "snippets"
    analyzer = CodeAnalyzer()
    paths = sorted(snippet_dir.glob("*.*"))

    print(f"Found {len(paths)} snippet(s)\n")

    for path in paths:
        profile_id = profile_for_path(path) or DEFAULT_PROFILE_ID
        result = analyzer.analyze(path.read_text(encoding="utf-8"), profile_id)
        mermaid = control_flow_graph_to_mermaid(result.graph)
        m = result.metrics
        print(f"{'='*60}")
        print(f"Snippet: {path.name} ({profile_id})")
        print(
            f"complexity={m.cyclomatic_complexity} time={m.time_complexity} "
            f"space={m.space_complexity} quality={m.quality_score}"
        )
        print(f"{'='*60}")
        print(mermaid)
        print("\n")

        # Save to file
        output_file = snippet_dir.parent / "generated" / f"{path.stem}.mmd"
        output_file.parent.mkdir(exist_ok=True)
        output_file.write_text(mermaid, encoding="utf-8")
        print(f"Saved to: {output_file}\n")
