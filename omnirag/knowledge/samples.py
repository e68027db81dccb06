from __future__ import annotations

"""Sample documents used to seed a fresh knowledge base."""

from omnirag.rag.types import Document, DocumentType

SAMPLE_DOCUMENTS: tuple[Document, ...] = (
    Document(
        id="1",
        title="Employee Remote Work Policy (Global)",
        type=DocumentType.PDF,
        content=(
            "1. Purpose: This policy defines the guidelines for remote work eligibility "
            "for all employees globally.\n"
            "2. Eligibility: Employees in \"Hybrid\" or \"Remote-First\" designated roles "
            "may work from home up to 4 days a week.\n"
            "3. Core Hours: Regardless of location, employees must be available during core "
            "collaboration hours (10:00 AM - 3:00 PM local time).\n"
            "4. Equipment: The company provides a one-time stipend of $1,000 for home office "
            "setup (monitor, chair, desk)."
        ),
        upload_date="2024-02-10",
    ),
    Document(
        id="2",
        title="Project Apollo - Product Specifications",
        type=DocumentType.MARKDOWN,
        content=(
            "## Project Apollo Overview\n"
            "Project Apollo is our next-gen renewable energy storage solution.\n"
            "### Technical Specs\n"
            "- **Capacity**: 50kWh per unit (modular up to 1MWh)\n"
            "- **Chemistry**: Lithium Iron Phosphate (LFP)\n"
            "- **Warranty**: 15 years or 8,000 cycles\n"
            "- **Inverter**: Integrated 10kW hybrid inverter\n"
            "### Target Market\n"
            "Primary focus is residential solar users in California and Australia. "
            "Launch date is Q3 2025."
        ),
        upload_date="2024-03-05",
    ),
    Document(
        id="3",
        title="Customer Support Playbook - Refund Process",
        type=DocumentType.TEXT,
        content=(
            "Standard Operating Procedure for Refunds:\n"
            "1. Verify Purchase: Check Order ID in the CRM.\n"
            "2. Eligibility Window: Refunds are only processed within 30 days of delivery.\n"
            "3. Condition: Item must be unopened. If opened, a 15% restocking fee applies.\n"
            "4. Approval: Refunds > $500 require Manager approval.\n"
            "5. Timeline: Process refunds within 3-5 business days back to the original "
            "payment method."
        ),
        upload_date="2024-01-20",
    ),
)
