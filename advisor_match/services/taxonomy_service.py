"""
Taxonomy Service
Loads the skill taxonomy (domains -> subtopics) and resolves the display
names that explanations show for each client need.

CSV format:
- domains.csv:   domain_id, name, description, display_order, is_active
- subtopics.csv: subtopic_id, domain_id, name, description, default_weight,
                 display_order, is_active

Inactive subtopics stay resolvable: existing needs may still reference them.
"""

from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from advisor_match.models.client import ClientNeed
from advisor_match.models.taxonomy import Domain, Subtopic
from advisor_match.services.logging_utils import print_with_prefix


class TaxonomyService:
    """In-memory lookup over the firm's skill taxonomy."""

    def __init__(
        self,
        domains_csv_path: str = "data/taxonomy/domains.csv",
        subtopics_csv_path: str = "data/taxonomy/subtopics.csv",
        verbose: bool = False
    ):
        """
        Args:
            domains_csv_path: Domains CSV (relative paths resolve from the project root)
            subtopics_csv_path: Subtopics CSV (relative paths resolve from the project root)
            verbose: If True, log loading progress
        """
        self.verbose = verbose
        self.project_root = Path(__file__).parent.parent.parent

        self._log(f"Loading taxonomy from: {domains_csv_path}, {subtopics_csv_path}")
        self.domains: Dict[str, Domain] = self._load_domains(self._resolve(domains_csv_path))
        self.subtopics: Dict[str, Subtopic] = self._load_subtopics(self._resolve(subtopics_csv_path))
        self._log(f"   -> {len(self.domains)} domains, {len(self.subtopics)} subtopics")

    def _resolve(self, csv_path: str) -> Path:
        path = Path(csv_path)
        if not path.is_absolute():
            path = self.project_root / path
        return path

    def _load_domains(self, csv_path: Path) -> Dict[str, Domain]:
        df = pd.read_csv(csv_path)
        df['description'] = df['description'].fillna('') if 'description' in df else ''

        domains = {}
        for _, row in df.iterrows():
            domains[row['domain_id']] = Domain(
                id=row['domain_id'],
                name=row['name'],
                description=row['description'] or None,
                display_order=int(row.get('display_order', 0)),
                is_active=bool(row.get('is_active', True)),
            )
        return domains

    def _load_subtopics(self, csv_path: Path) -> Dict[str, Subtopic]:
        df = pd.read_csv(csv_path)
        df['description'] = df['description'].fillna('') if 'description' in df else ''

        subtopics = {}
        for _, row in df.iterrows():
            domain = self.domains.get(row['domain_id'])
            if domain is None:
                self._log(f"   Subtopic {row['subtopic_id']} references unknown domain {row['domain_id']}")
            subtopics[row['subtopic_id']] = Subtopic(
                id=row['subtopic_id'],
                domain_id=row['domain_id'],
                name=row['name'],
                description=row['description'] or None,
                default_weight=float(row.get('default_weight', 1.0)),
                display_order=int(row.get('display_order', 0)),
                is_active=bool(row.get('is_active', True)),
                domain=domain,
            )
        return subtopics

    def get_subtopic(self, subtopic_id: str) -> Optional[Subtopic]:
        return self.subtopics.get(subtopic_id)

    def subtopics_for_domain(self, domain_id: str, active_only: bool = True) -> List[Subtopic]:
        """Subtopics of a domain in display order (the intake wizard's listing)."""
        found = [
            s for s in self.subtopics.values()
            if s.domain_id == domain_id and (s.is_active or not active_only)
        ]
        return sorted(found, key=lambda s: s.display_order)

    def attach(self, needs: List[ClientNeed]) -> List[ClientNeed]:
        """Copies of the needs with their subtopic (and domain) resolved."""
        attached = []
        for need in needs:
            subtopic = self.subtopics.get(need.subtopic_id)
            if subtopic is None:
                self._log(f"   Unknown subtopic: {need.subtopic_id}")
                attached.append(need)
            else:
                attached.append(need.model_copy(update={"subtopic": subtopic}))
        return attached

    def _log(self, message: str) -> None:
        print_with_prefix("[TaxonomyService]", message, enabled=self.verbose)
