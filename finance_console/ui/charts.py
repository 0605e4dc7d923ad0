"""
Chart components for data visualization.
"""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st


class ChartComponents:
    """Collection of reusable chart components."""

    @staticmethod
    def trend_figure(frame: pd.DataFrame, currency: str = "VND", height: int = 400) -> go.Figure:
        """Bar per period with the transaction count as a line on a second axis."""
        fig = go.Figure()
        fig.add_trace(
            go.Bar(
                x=frame["label"],
                y=frame["total_amount"],
                name=f"Total amount ({currency})",
                marker_color="#1f77b4",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=frame["label"],
                y=frame["transaction_count"],
                name="Transactions",
                mode="lines+markers",
                yaxis="y2",
                line=dict(color="#ff7f0e"),
            )
        )
        fig.update_layout(
            height=height,
            xaxis_title="Period",
            yaxis=dict(title=f"Amount ({currency})"),
            yaxis2=dict(title="Transactions", overlaying="y", side="right", showgrid=False),
            legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
            hovermode="x unified",
        )
        return fig

    @staticmethod
    def trend_chart(frame: pd.DataFrame, currency: str = "VND", height: int = 400) -> None:
        if frame.empty:
            st.info("No data available for chart")
            return
        st.plotly_chart(ChartComponents.trend_figure(frame, currency, height), use_container_width=True)

    @staticmethod
    def ranking_chart(frame: pd.DataFrame, title: str, height: int = 320) -> None:
        """Horizontal bars, best ranked at the top."""
        if frame.empty:
            st.info("No data available for chart")
            return

        fig = px.bar(
            frame,
            x="total_amount",
            y="name",
            orientation="h",
            title=title,
            height=height,
            hover_data={"amount": True, "transaction_count": True, "total_amount": False},
        )
        fig.update_layout(xaxis_title="Amount", yaxis_title="", yaxis=dict(autorange="reversed"))
        st.plotly_chart(fig, use_container_width=True)
