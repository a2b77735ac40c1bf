"""
Visualization utilities for audit results.
"""
import base64
import io
import logging
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from app.models.base import AuditSummary

# Configure logging
logger = logging.getLogger(__name__)

BAR_COLORS = ['#22d3ee', '#3b82f6', '#6366f1', '#f59e0b', '#ef4444']


class AuditVisualizer:
    """Visualizer for audit results."""

    def generate_overview_chart(self, summary: AuditSummary) -> str:
        """
        Generate a bar chart of input counts and findings.

        Args:
            summary: Audit summary

        Returns:
            Base64 encoded PNG image
        """
        logger.info("Generating audit overview chart")
        bars_data = summary.chart_data()
        names = [bar["name"] for bar in bars_data]
        values = [bar["value"] for bar in bars_data]

        fig, ax = plt.subplots(figsize=(10, 6))
        try:
            bars = ax.bar(names, values, color=BAR_COLORS[:len(names)])
            ax.set_ylabel('Count')
            ax.set_title('Audit Overview')

            # Add value labels on bars
            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width()/2, bar.get_height(),
                        str(value), ha='center', va='bottom')

            img_buffer = io.BytesIO()
            fig.savefig(img_buffer, format='png', bbox_inches='tight')
            img_buffer.seek(0)
            return base64.b64encode(img_buffer.read()).decode()
        finally:
            plt.close(fig)
